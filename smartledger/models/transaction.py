from datetime import date, datetime
from ..extensions import db

KINDS = ("income", "expense")


class Transaction(db.Model):
    __tablename__ = "transactions"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    # no FK: deleting a category leaves its transactions in place
    category_id = db.Column(db.Integer, nullable=False)
    kind = db.Column(db.String(10), nullable=False)  # income/expense
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    date = db.Column(db.Date, default=date.today, nullable=False)
    note = db.Column(db.Text, default="", nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.Index("ix_tx_user_date", "user_id", "date"),
        db.Index("ix_tx_user_kind_date", "user_id", "kind", "date"),
        db.Index("ix_tx_user_category_date", "user_id", "category_id", "date"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "categoryId": self.category_id,
            "type": self.kind,
            "amount": float(self.amount),
            "date": self.date.isoformat(),
            "note": self.note or "",
        }
