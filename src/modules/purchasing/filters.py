import django_filters

from modules.purchasing.constants import PurchaseOrderStatus
from modules.purchasing.models import PurchaseOrder


class PurchaseOrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=PurchaseOrderStatus.choices)
    shop = django_filters.CharFilter(field_name="shop")
    original_order_id = django_filters.CharFilter(field_name="original_order_id")

    class Meta:
        model = PurchaseOrder
        fields = ["status", "shop", "original_order_id"]
