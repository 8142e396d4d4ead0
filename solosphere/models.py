from solosphere import db
from solosphere.fields import format_datetime

BID_STATUSES = ('pending', 'in-progress', 'complete', 'rejected')


class JobModel(db.Model):
    __tablename__ = 'jobs'
    # Ids of deleted jobs are never handed out again; their bids stay behind
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(80), nullable=False, index=True)
    deadline = db.Column(db.DateTime, nullable=False)
    min_price = db.Column(db.Float, nullable=False)
    max_price = db.Column(db.Float, nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    buyer_name = db.Column(db.String(120))
    buyer_email = db.Column(db.String(255), nullable=False, index=True)
    buyer_photo = db.Column(db.String(500))
    bid_count = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            '_id': self.id,
            'title': self.title,
            'category': self.category,
            'deadline': format_datetime(self.deadline),
            'min_price': self.min_price,
            'max_price': self.max_price,
            'description': self.description,
            'buyer': {
                'name': self.buyer_name,
                'email': self.buyer_email,
                'photo': self.buyer_photo,
            },
            'bid_count': self.bid_count,
        }


class BidModel(db.Model):
    __tablename__ = 'bids'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    price = db.Column(db.Float, nullable=False)
    comment = db.Column(db.Text, nullable=False, default='')
    deadline = db.Column(db.DateTime, nullable=False)
    # Plain reference: deleting a job leaves its bids in place
    job_id = db.Column(db.Integer, nullable=False)
    title = db.Column(db.String(200))
    category = db.Column(db.String(80))
    status = db.Column(db.String(20), nullable=False, default='pending')
    buyer = db.Column(db.String(255), index=True)

    __table_args__ = (
        db.UniqueConstraint('email', 'job_id', name='uq_bid_email_job'),
    )

    def to_dict(self):
        return {
            '_id': self.id,
            'email': self.email,
            'price': self.price,
            'comment': self.comment,
            'deadline': format_datetime(self.deadline),
            'jobId': self.job_id,
            'title': self.title,
            'category': self.category,
            'status': self.status,
            'buyer': self.buyer,
        }
