from fastapi import APIRouter, Depends

from storefront.exceptions import CartItemNotFound
from storefront.models.account import Account
from storefront.schemas.cart_schemas import CartAddRequest, CartUpdateRequest
from storefront.dependencies.services import get_cart_store
from storefront.services.cart_service import CartStore
from storefront.utils.responses import success
from storefront.utils.token import get_current_account

router = APIRouter()


# View Cart

@router.get("")
def view_cart(
    cart: CartStore = Depends(get_cart_store),
    current_account: Account = Depends(get_current_account)
):
    items = cart.get_cart_items(current_account.id)

    return success({
        "items": items,
        "summary": {
            "item_count": sum(i["quantity"] for i in items),
            "subtotal": cart.cart_subtotal(items),
        }
    })


# Add to Cart

@router.post("/add")
def add_to_cart(
    data: CartAddRequest,
    cart: CartStore = Depends(get_cart_store),
    current_account: Account = Depends(get_current_account)
):
    line, created = cart.add_to_cart(
        current_account.id, data.product_id, data.quantity, data.price
    )

    return success(
        {
            "cart_id": line.id,
            "product_id": line.product_id,
            "quantity": line.quantity,
            "price_at_added": line.price_at_added,
            "created": created,
        },
        "Product added to cart" if created else "Cart updated",
    )


# Update Cart

@router.put("/update")
def update_cart_item(
    data: CartUpdateRequest,
    cart: CartStore = Depends(get_cart_store),
    current_account: Account = Depends(get_current_account)
):
    if not cart.update_cart_item(current_account.id, data.cart_id, data.quantity):
        raise CartItemNotFound()

    return success(message="Cart updated")


# Remove Cart

@router.delete("/item/{cart_id}")
def remove_cart_item(
    cart_id: int,
    cart: CartStore = Depends(get_cart_store),
    current_account: Account = Depends(get_current_account)
):
    if not cart.remove_cart_item(current_account.id, cart_id):
        raise CartItemNotFound()

    return success(message="Item removed")


# Clear Cart

@router.delete("/clear")
def clear_cart(
    cart: CartStore = Depends(get_cart_store),
    current_account: Account = Depends(get_current_account)
):
    removed = cart.clear_cart(current_account.id)
    return success({"removed": removed}, "Cart cleared")
