from app.models.user import User
from app.models.order import Order
from app.models.order_item import Item

# add ALL models here
