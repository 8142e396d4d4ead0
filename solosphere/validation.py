from solosphere.fields import utcnow

SELF_BID = 'Action not permitted'
DEADLINE_CROSSED = 'Deadline crossed, bidding forbidden!'
PRICE_TOO_HIGH = 'Offer less or at least equal to maximum price!'
OFFER_AFTER_DEADLINE = 'Offer a date within deadline!'


def check_bid(job, bidder_email, price, offered_deadline, now=None):
    """Return the message of the first rule the bid breaks, or None when it may be placed."""
    if now is None:
        now = utcnow()

    if bidder_email == job.buyer_email:
        return SELF_BID
    if now > job.deadline:
        return DEADLINE_CROSSED
    if price > job.max_price:
        return PRICE_TOO_HIGH
    if offered_deadline > job.deadline:
        return OFFER_AFTER_DEADLINE
    return None
