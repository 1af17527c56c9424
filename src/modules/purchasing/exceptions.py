class PurchaseOrderNotFound(Exception):
    pass
