def compact_order(items, order_field="pageorder"):
    """
    Re-assigns sequential order values (1..N) to items, keeping their
    current relative order.
    """
    items = sorted(items, key=lambda item: getattr(item, order_field))

    for index, item in enumerate(items, start=1):
        if getattr(item, order_field) != index:
            setattr(item, order_field, index)

    return items
