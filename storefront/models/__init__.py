from storefront.models.account import Account
from storefront.models.product import Product
from storefront.models.address import Address
from storefront.models.cart import CartLine
from storefront.models.order import Order
from storefront.models.order_item import OrderItem
from storefront.models.order_status_history import OrderStatusHistory
from storefront.models.payment import Payment
from storefront.models.invoice import Invoice

# add ALL models here
