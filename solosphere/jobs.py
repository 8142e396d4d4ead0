import logging

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from solosphere import db
from solosphere.auth import current_email, owner_required
from solosphere.fields import parse_datetime, parse_number, parse_text
from solosphere.listing import apply_pagination, apply_sort, build_job_query, parse_pagination
from solosphere.models import JobModel

jobs_bp = Blueprint('jobs', __name__)
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('title', 'category', 'deadline', 'min_price', 'max_price', 'buyer_email')


def job_values(data, job=None):
    """
    Map a posted job document onto JobModel columns.

    With an existing ``job`` only the fields present are returned (an update);
    otherwise every required column must be there (an insert). The price range
    is checked against the job's stored prices merged with the new ones.
    Raises ValueError.
    """
    partial = job is not None
    values = {}
    for field in ('title', 'category'):
        if field in data:
            values[field] = parse_text(data[field], field)
    if 'description' in data:
        values['description'] = parse_text(data['description'], 'description', optional=True) or ''
    if 'deadline' in data:
        values['deadline'] = parse_datetime(data['deadline'])
    for field in ('min_price', 'max_price'):
        if field in data:
            values[field] = parse_number(data[field])

    buyer = data.get('buyer')
    if buyer is not None:
        if not isinstance(buyer, dict):
            raise ValueError('buyer must be an object')
        for key in ('name', 'email', 'photo'):
            if key in buyer:
                values[f'buyer_{key}'] = parse_text(buyer[key], f'buyer.{key}', optional=key != 'email')

    missing = [
        column for column in REQUIRED_COLUMNS
        if values.get(column) in (None, '') and (column in values or not partial)
    ]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    min_price = values.get('min_price', job.min_price if partial else None)
    max_price = values.get('max_price', job.max_price if partial else None)
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValueError('min_price cannot exceed max_price')
    return values


def _resync_job_ids():
    # An explicit id does not advance a PostgreSQL sequence; SQLite and MySQL track the max themselves
    if db.session.get_bind().dialect.name == 'postgresql':
        db.session.execute(db.text(
            "SELECT setval(pg_get_serial_sequence('jobs', 'id'), (SELECT MAX(id) FROM jobs))"
        ))


# --- Add Job ---
@jobs_bp.route('/add-job', methods=['POST'])
def add_job():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a job object'}), 400

    try:
        values = job_values(data)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    job = JobModel(**values)
    db.session.add(job)
    db.session.commit()

    logger.info(f"Job {job.id} posted by {job.buyer_email}")
    return jsonify({'acknowledged': True, 'insertedId': job.id}), 200


# --- Get All Jobs ---
@jobs_bp.route('/jobs', methods=['GET'])
def get_jobs():
    jobs = JobModel.query.order_by(JobModel.id).all()
    return jsonify([job.to_dict() for job in jobs]), 200


# --- Get Jobs Posted by a User ---
@jobs_bp.route('/jobs/<email>', methods=['GET'])
@owner_required()
def get_jobs_by_buyer(email):
    jobs = JobModel.query.filter_by(buyer_email=email).order_by(JobModel.id).all()
    return jsonify([job.to_dict() for job in jobs]), 200


# --- Get Job ---
@jobs_bp.route('/job/<int:job_id>', methods=['GET'])
def get_job(job_id):
    job = db.session.get(JobModel, job_id)
    if not job:
        return jsonify({'error': 'Job not found'}), 404
    return jsonify(job.to_dict()), 200


# --- Update Job (upsert) ---
@jobs_bp.route('/update-job/<int:job_id>', methods=['PUT'])
def update_job(job_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a job object'}), 400

    job = db.session.get(JobModel, job_id)
    try:
        values = job_values(data, job)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    if job is None:
        db.session.add(JobModel(id=job_id, **values))
        db.session.flush()
        _resync_job_ids()
        db.session.commit()
        logger.info(f"Job {job_id} created by upsert")
        return jsonify({
            'acknowledged': True,
            'matchedCount': 0,
            'modifiedCount': 0,
            'upsertedId': job_id
        }), 200

    modified = False
    for column, value in values.items():
        if getattr(job, column) != value:
            setattr(job, column, value)
            modified = True
    db.session.commit()

    return jsonify({
        'acknowledged': True,
        'matchedCount': 1,
        'modifiedCount': 1 if modified else 0,
        'upsertedId': None
    }), 200


# --- Delete Job ---
@jobs_bp.route('/job/<int:job_id>', methods=['DELETE'])
@jwt_required()
def delete_job(job_id):
    job = db.session.get(JobModel, job_id)
    if not job:
        return jsonify({'acknowledged': True, 'deletedCount': 0}), 200

    if job.buyer_email != current_email():
        logger.warning(f"{current_email()} attempted to delete job {job_id} owned by {job.buyer_email}")
        return jsonify({'message': 'forbidden access'}), 403

    db.session.delete(job)
    db.session.commit()
    return jsonify({'acknowledged': True, 'deletedCount': 1}), 200


# --- Filtered, Sorted, Paginated Listing ---
@jobs_bp.route('/all-jobs', methods=['GET'])
def all_jobs():
    try:
        page, size = parse_pagination(request.args)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    query = build_job_query(request.args.get('filter'), request.args.get('search'))
    query = apply_pagination(apply_sort(query, request.args.get('sort')), page, size)
    return jsonify([job.to_dict() for job in query.all()]), 200


# --- Listing Count ---
@jobs_bp.route('/jobs-count', methods=['GET'])
def jobs_count():
    count = build_job_query(request.args.get('filter'), request.args.get('search')).count()
    return jsonify({'count': count}), 200
