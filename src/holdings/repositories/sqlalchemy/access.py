"""Owner scoping shared by the SQLAlchemy repositories."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from holdings.core.exceptions import PermissionDeniedError
from holdings.repositories.sqlalchemy.orm_models import AccountORM


def ensure_account_access(db: Session, owner_id: str, account_id: str) -> bool:
    """
    Check that account_id belongs to owner_id.

    Returns False when the account does not exist (no data); raises
    PermissionDeniedError when it exists under another owner.
    """
    orm_account = db.query(AccountORM).filter(
        AccountORM.account_id == account_id
    ).first()
    if orm_account is None:
        return False
    if orm_account.owner_id != owner_id:
        raise PermissionDeniedError("Account", account_id)
    return True


def to_decimal(value) -> Optional[Decimal]:
    """Convert a Numeric column value to Decimal, keeping None (and zero) intact."""
    if value is None:
        return None
    return Decimal(str(value))
