from datetime import date
from ..extensions import db


class Expense(db.Model):
    __tablename__ = "expenses"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False, index=True)
    label = db.Column(db.String(255), nullable=False, default="")
    amount = db.Column(db.Float, nullable=False, default=0.0)
    date = db.Column(db.Date, nullable=False, default=date.today)

    category = db.relationship("Category", lazy="joined")

    def __repr__(self):
        return f"<Expense {self.id} {self.label!r} {self.amount}>"
