from ..extensions import db


class BudgetLimit(db.Model):
    __tablename__ = "budget_limits"
    id = db.Column(db.Integer, primary_key=True)
    budget_id = db.Column(db.Integer, db.ForeignKey("budgets.id"), nullable=False)
    # may outlive the category it points at
    category_id = db.Column(db.Integer, nullable=False)
    cap = db.Column(db.Numeric(12, 2), nullable=False)

    __table_args__ = (
        db.UniqueConstraint("budget_id", "category_id", name="uq_budget_category"),
    )

    def to_dict(self):
        return {"categoryId": self.category_id, "limit": float(self.cap)}
