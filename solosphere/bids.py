import logging

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import IntegrityError

from solosphere import db
from solosphere.auth import owner_required
from solosphere.fields import parse_datetime, parse_number, parse_text
from solosphere.models import BID_STATUSES, BidModel, JobModel
from solosphere.validation import check_bid

bids_bp = Blueprint('bids', __name__)
logger = logging.getLogger(__name__)

DUPLICATE_BID = 'you have already placed a bid on this job'


def _plain_text(message, status):
    return message, status, {'Content-Type': 'text/plain; charset=utf-8'}


# --- Add Bid ---
@bids_bp.route('/add-bid', methods=['POST'])
def add_bid():
    """
    Place a bid on a job.

    The bid insert and the job's bid_count increment share one transaction.
    The (email, job_id) unique constraint rejects a second bid from the same
    bidder, rolling back both writes.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a bid object'}), 400

    email = data.get('email')
    if not email or not isinstance(email, str):
        return jsonify({'error': 'email is required'}), 400

    try:
        job_id = int(data.get('jobId'))
        price = parse_number(data.get('price'))
        deadline = parse_datetime(data.get('deadline'))
        comment = parse_text(data.get('comment'), 'comment', optional=True) or ''
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Invalid bid: {e}'}), 400

    job = db.session.get(JobModel, job_id)
    if not job:
        return jsonify({'error': 'Job not found'}), 404

    problem = check_bid(job, email, price, deadline)
    if problem:
        logger.info(f"Bid by {email} on job {job_id} refused: {problem}")
        return _plain_text(problem, 400)

    bid = BidModel(
        email=email,
        price=price,
        comment=comment,
        deadline=deadline,
        job_id=job.id,
        title=job.title,
        category=job.category,
        status='pending',
        buyer=job.buyer_email
    )

    try:
        db.session.add(bid)
        db.session.flush()
        JobModel.query.filter_by(id=job.id).update(
            {JobModel.bid_count: JobModel.bid_count + 1}, synchronize_session=False
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        # Only the (email, job_id) constraint means a duplicate
        if not BidModel.query.filter_by(email=email, job_id=job_id).first():
            raise
        logger.info(f"Duplicate bid by {email} on job {job_id}")
        return _plain_text(DUPLICATE_BID, 400)

    return jsonify({'acknowledged': True, 'insertedId': bid.id}), 200


# --- Bids of a User ---
@bids_bp.route('/my-bids/<email>', methods=['GET'])
@owner_required()
def my_bids(email):
    # ?buyer=true lists the bid requests received on the user's own jobs
    as_buyer = request.args.get('buyer', '').lower() in ('true', '1', 'yes')
    if as_buyer:
        query = BidModel.query.filter_by(buyer=email)
    else:
        query = BidModel.query.filter_by(email=email)

    bids = query.order_by(BidModel.id).all()
    return jsonify([bid.to_dict() for bid in bids]), 200


# --- Update Bid Status ---
@bids_bp.route('/bid-status-update/<int:bid_id>', methods=['PATCH'])
def update_bid_status(bid_id):
    data = request.get_json(silent=True) or {}
    status = data.get('status')
    if isinstance(status, str):
        status = status.strip().lower().replace(' ', '-')

    if status not in BID_STATUSES:
        return jsonify({'error': f"status must be one of: {', '.join(BID_STATUSES)}"}), 400

    bid = db.session.get(BidModel, bid_id)
    if not bid:
        return jsonify({'acknowledged': True, 'matchedCount': 0, 'modifiedCount': 0}), 200

    modified = bid.status != status
    bid.status = status
    db.session.commit()

    logger.info(f"Bid {bid_id} status set to {status}")
    return jsonify({
        'acknowledged': True,
        'matchedCount': 1,
        'modifiedCount': 1 if modified else 0
    }), 200
