from subpage.domain.exceptions import InvariantViolation

def assert_page_order(links):
    """
    Page orders of a subpage's links must be exactly 1..k.
    """
    orders = [link.pageorder for link in links]
    if not orders:
        return

    expected = list(range(1, len(orders) + 1))
    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Subpage section orders are not consecutive starting from 1: {orders}"
        )

def assert_target_order(pageorder, count):
    if not isinstance(pageorder, int) or isinstance(pageorder, bool):
        raise InvariantViolation(f"Page order must be an integer, got {pageorder!r}")

    if pageorder < 1 or pageorder > count:
        raise InvariantViolation(
            f"Page order {pageorder} is outside 1..{count}"
        )
