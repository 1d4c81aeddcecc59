import uuid

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..errors import DuplicateEmailError
from ..extensions import db
from ..models import Expense, User
from .base import Store, utcnow


class SqlAlchemyStore(Store):
    """Store backed by the Flask-SQLAlchemy session; needs an app context."""

    def __init__(self, clock=utcnow):
        self._clock = clock

    def get_user(self, user_id):
        user = db.session.get(User, user_id)
        return user.to_record() if user else None

    def get_user_by_email(self, email):
        user = User.query.filter_by(email=email).first()
        return user.to_record() if user else None

    def create_user(self, email, password):
        if User.query.filter_by(email=email).first():
            raise DuplicateEmailError(email)
        user = User(id=str(uuid.uuid4()), email=email, password=password, created_at=self._clock())
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # lost a race against a concurrent signup for the same email
            db.session.rollback()
            raise DuplicateEmailError(email)
        return user.to_record()

    def get_expenses_by_user_id(self, user_id):
        rows = (
            Expense.query.filter_by(user_id=user_id)
            .order_by(Expense.created_at.desc(), Expense.seq.desc())
            .all()
        )
        return [row.to_record() for row in rows]

    def create_expense(self, user_id, amount, category, date, note=None):
        next_seq = db.session.query(func.coalesce(func.max(Expense.seq), 0)).scalar() + 1
        exp = Expense(
            id=str(uuid.uuid4()),
            user_id=user_id,
            amount=float(amount),
            category=category,
            spent_on=date,
            note=note,
            created_at=self._clock(),
            seq=next_seq,
        )
        db.session.add(exp)
        db.session.commit()
        return exp.to_record()
