"""
Shared Kernel

Value objects, the domain error taxonomy and the REST framework error
handler used by the equipment and booking apps.
"""
