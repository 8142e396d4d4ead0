"""Filter, sort and pagination for the public job listing.

``/all-jobs`` and ``/jobs-count`` share :func:`build_job_query` so the count the
client divides into pages always matches the documents it pages through.
"""

from solosphere.models import JobModel


def _escape_like(term):
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def build_job_query(category=None, search=None):
    """Jobs whose title contains ``search`` (case-insensitive) and whose category equals ``category``."""
    query = JobModel.query
    if search:
        query = query.filter(JobModel.title.ilike(f'%{_escape_like(search)}%', escape='\\'))
    if category:
        query = query.filter(JobModel.category == category)
    return query


def apply_sort(query, sort=None):
    # id keeps page boundaries stable between equal deadlines
    if not sort:
        return query.order_by(JobModel.id)
    if sort == 'asc':
        return query.order_by(JobModel.deadline.asc(), JobModel.id)
    return query.order_by(JobModel.deadline.desc(), JobModel.id)


def parse_pagination(args):
    """
    Read 1-based ``page`` and ``size`` from request args.

    Returns ``(page, size)``; ``size`` is None when the client did not ask for
    paging. Raises ValueError for non-integer or non-positive values.
    """
    raw_page = args.get('page')
    raw_size = args.get('size')

    page = int(raw_page) if raw_page not in (None, '') else 1
    size = int(raw_size) if raw_size not in (None, '') else None

    if page < 1:
        raise ValueError('page must be 1 or greater')
    if size is not None and size < 1:
        raise ValueError('size must be 1 or greater')
    return page, size


def apply_pagination(query, page, size):
    if size is None:
        return query
    return query.offset((page - 1) * size).limit(size)
