"""
Top-level models import shim for the Orders app, so that

    from apps.orders.models import ProcurementOrder

keeps working while each model lives in its own file.
"""

from .order import *          # ProcurementOrder, OrderStatus
