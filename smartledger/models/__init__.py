from .user import User
from .category import Category
from .transaction import Transaction, KINDS
from .budget import Budget
from .budget_limit import BudgetLimit

__all__ = ["User", "Category", "Transaction", "KINDS", "Budget", "BudgetLimit"]
