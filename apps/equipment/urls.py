"""URL routing for the equipment catalogue."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import CategoryListView, EquipmentSearchView, MyEquipmentViewSet, PublicEquipmentViewSet

router = SimpleRouter()
router.register(r"public", PublicEquipmentViewSet, basename="equipment-public")
router.register(r"my", MyEquipmentViewSet, basename="equipment-my")

urlpatterns = [
    path("search/", EquipmentSearchView.as_view(), name="equipment-search"),
    path("categories/", CategoryListView.as_view(), name="equipment-categories"),
    path("", include(router.urls)),
]
