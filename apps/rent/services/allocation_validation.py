"""
Allocation validation.

Pure checks over a set of per-member amounts; nothing here touches the
database. Drafting uses the result as a hint (live remainder), submission
uses it as a hard gate.

Example::

    from decimal import Decimal
    from apps.rent.services import validate_allocations

    result = validate_allocations(
        [
            {'user_id': alice.id, 'amount': Decimal('500.00')},
            {'user_id': bob.id, 'amount': Decimal('500.00')},
            {'user_id': carol.id, 'amount': Decimal('499.00')},
        ],
        Decimal('1500.00'),
    )
    result['is_valid']    # False
    result['difference']  # Decimal('1.00')
    result['message']     # 'Allocations under by $1.00'
"""

from decimal import Decimal


DEFAULT_TOLERANCE = Decimal('0.01')


def format_rent_amount(amount):
    """Format an amount in USD for messages, e.g. ``$1,500.00``."""
    return f"${Decimal(amount):,.2f}"


def _as_entry(allocation):
    # Accepts serializer dicts and RentAllocation instances alike
    if isinstance(allocation, dict):
        return allocation['user_id'], allocation['amount']
    return allocation.user_id, allocation.amount


def validate_allocations(allocations, total_rent_amount, member_ids=None,
                         tolerance=DEFAULT_TOLERANCE):
    """
    Check allocations against the rent total and, optionally, the membership.

    Args:
        allocations: Iterable of ``{'user_id', 'amount'}`` dicts or
            RentAllocation instances.
        total_rent_amount (Decimal): The configured monthly rent.
        member_ids (Iterable, optional): Current member IDs. When given,
            the allocation user IDs must match them exactly.
        tolerance (Decimal): Sum is accepted when
            ``|difference| < tolerance``.

    Returns:
        dict: ``is_valid``, ``sum_matches``, ``total_allocated``,
        ``difference`` (total minus allocated), ``message``, and the sorted
        ``missing_user_ids``, ``unexpected_user_ids``,
        ``duplicate_user_ids`` and ``negative_user_ids`` lists.
    """
    total_rent_amount = Decimal(str(total_rent_amount))
    total_allocated = Decimal('0.00')
    seen = set()
    duplicates = set()
    negatives = set()

    for allocation in allocations:
        user_id, amount = _as_entry(allocation)
        key = str(user_id)
        amount = Decimal(str(amount))

        if key in seen:
            duplicates.add(key)
        seen.add(key)

        if amount < 0:
            negatives.add(key)
        total_allocated += amount

    difference = total_rent_amount - total_allocated
    sum_matches = abs(difference) < tolerance

    missing = set()
    unexpected = set()
    if member_ids is not None:
        members = {str(member_id) for member_id in member_ids}
        missing = members - seen
        unexpected = seen - members

    if negatives:
        message = 'Allocation amounts cannot be negative'
    elif duplicates:
        message = 'Each member can only have one allocation'
    elif missing or unexpected:
        message = 'Allocations must cover exactly the current house members'
    elif not sum_matches:
        direction = 'under' if difference > 0 else 'over'
        message = f"Allocations {direction} by {format_rent_amount(abs(difference))}"
    else:
        message = 'Allocations are valid'

    return {
        'is_valid': sum_matches and not (negatives or duplicates or missing or unexpected),
        'sum_matches': sum_matches,
        'total_allocated': total_allocated,
        'difference': difference,
        'message': message,
        'missing_user_ids': sorted(missing),
        'unexpected_user_ids': sorted(unexpected),
        'duplicate_user_ids': sorted(duplicates),
        'negative_user_ids': sorted(negatives),
    }
