from fastapi import Depends, HTTPException

from storefront.models.account import Account
from storefront.utils.token import get_current_account


def require_admin(current_account: Account = Depends(get_current_account)):
    if current_account.role != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_account
