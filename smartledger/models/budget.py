from datetime import datetime
from ..extensions import db


class Budget(db.Model):
    __tablename__ = "budgets"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    month = db.Column(db.String(7), nullable=False)  # e.g., '2025-10'
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    limits = db.relationship(
        "BudgetLimit",
        backref="budget",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="BudgetLimit.id",
    )

    __table_args__ = (
        db.UniqueConstraint("user_id", "month", name="uq_user_month"),
    )

    @property
    def caps(self):
        """Limits keyed by category id, in insertion order."""
        return {lim.category_id: lim.cap for lim in self.limits}

    def to_dict(self):
        return {
            "id": self.id,
            "month": self.month,
            "limits": [lim.to_dict() for lim in self.limits],
        }
