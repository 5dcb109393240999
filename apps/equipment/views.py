"""Equipment API views."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore

from . import services
from .filters import EquipmentFilterSet
from .models import Equipment
from .search import search_equipment
from .serializers import (
    EquipmentSearchSerializer,
    EquipmentSerializer,
    EquipmentWriteSerializer,
    SearchHitSerializer,
)


class PublicEquipmentViewSet(viewsets.ReadOnlyModelViewSet):
    """Catalogue visible to everyone.

    The list shows bookable equipment only; the detail view also serves
    listings the owner has switched off.
    """

    serializer_class = EquipmentSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = EquipmentFilterSet
    ordering_fields = ["price_per_day", "rating", "created_at", "times_rented"]

    def get_queryset(self):  # type: ignore
        qs = Equipment.objects.select_related("owner")
        if self.action == "list":
            return qs.filter(available=True)
        return qs


class MyEquipmentViewSet(viewsets.ModelViewSet):
    """CRUD on the current user's own listings."""

    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = EquipmentFilterSet
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        return Equipment.objects.select_related("owner").filter(owner=self.request.user)

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return EquipmentWriteSerializer
        return EquipmentSerializer

    def perform_create(self, serializer):  # type: ignore
        serializer.save(owner=self.request.user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        data = EquipmentSerializer(serializer.instance, context=self.get_serializer_context()).data
        return Response(data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(EquipmentSerializer(serializer.instance, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_equipment(kwargs["pk"], request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="toggle-availability")
    def toggle_availability(self, request, pk=None):  # type: ignore
        equipment = services.toggle_availability(pk, request.user)
        return Response(EquipmentSerializer(equipment, context=self.get_serializer_context()).data)


class EquipmentSearchView(APIView):
    """Available equipment near a point, ranked by distance, price or rating."""

    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        serializer = EquipmentSearchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        hits = search_equipment(serializer.to_query())
        return Response(SearchHitSerializer(hits, many=True, context={"request": request}).data)


class CategoryListView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        data = [{"value": value, "label": str(label)} for value, label in Equipment.Category.choices]
        return Response(data)
