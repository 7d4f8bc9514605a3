from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from accounts.models import User
from catalog.models import Category, Product
from inventory.models import InventoryItem
from purchases.models import Supplier
from sales.models import Order
from stores.models import Business, Store, StoreUser

# Wednesday 2026-10-14, mid-month, used as "now" by the aggregation tests.
NOW = datetime(2026, 10, 14, 15, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def business(db):
    return Business.objects.create(
        name="Spa Lumiere",
        code="SPA-LUM",
        legal_name="Spa Lumiere LLC",
        currency="USD",
        timezone="UTC",
    )


@pytest.fixture
def store(db, business):
    return Store.objects.create(
        business=business,
        name="Boutique Centre",
        code="SPA-001",
        address="12 Main Street",
        phone="+15550000000",
        email="centre@spa.test",
    )


@pytest.fixture
def other_business(db):
    return Business.objects.create(name="Autre Spa", code="SPA-OTHER", timezone="UTC")


@pytest.fixture
def other_store(db, other_business):
    return Store.objects.create(business=other_business, name="Autre Boutique", code="SPA-900")


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.com",
        password="testpass123",
        first_name="Admin",
        last_name="User",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def manager_user(db):
    return User.objects.create_user(
        email="manager@test.com",
        password="testpass123",
        first_name="Manager",
        last_name="User",
        role=User.Role.MANAGER,
        position_type=User.Position.MANAGER,
    )


@pytest.fixture
def sales_user(db):
    return User.objects.create_user(
        email="sales@test.com",
        password="testpass123",
        first_name="Sales",
        last_name="User",
        role=User.Role.SALES,
        position_type=User.Position.SALES_ASSOCIATE,
    )


@pytest.fixture
def opener_user(db):
    return User.objects.create_user(
        email="opener@test.com",
        password="testpass123",
        first_name="Opener",
        last_name="User",
        role=User.Role.SALES,
        position_type=User.Position.OPENER,
    )


@pytest.fixture
def store_user_admin(store, admin_user):
    return StoreUser.objects.create(store=store, user=admin_user, is_default=True)


@pytest.fixture
def store_user_manager(store, manager_user):
    return StoreUser.objects.create(store=store, user=manager_user, is_default=True)


@pytest.fixture
def store_user_sales(store, sales_user):
    return StoreUser.objects.create(store=store, user=sales_user, is_default=True)


@pytest.fixture
def store_user_opener(store, opener_user):
    return StoreUser.objects.create(store=store, user=opener_user, is_default=True)


@pytest.fixture
def category(db, business):
    return Category.objects.create(business=business, name="Soins du visage", slug="soins-visage")


@pytest.fixture
def supplier(db, business):
    return Supplier.objects.create(
        business=business,
        name="Laboratoires Aube",
        contact_name="Claire Aube",
        email="orders@aube.test",
    )


@pytest.fixture
def product(business, category, supplier):
    return Product.objects.create(
        business=business,
        category=category,
        supplier=supplier,
        name="Serum Eclat",
        sku="SER-001",
        cost_price=Decimal("12.00"),
        selling_price=Decimal("45.00"),
    )


@pytest.fixture
def inventory_item(store, product):
    return InventoryItem.objects.create(
        store=store,
        product=product,
        quantity_on_hand=40,
        low_stock_threshold=5,
        max_stock=100,
    )


@pytest.fixture
def make_order(store):
    """Factory for completed orders with a given total and completion time."""

    def _make(seller, total, completed_at=NOW, sale_type=Order.SaleType.REGULAR, status=Order.Status.COMPLETED, order_store=None):
        return Order.objects.create(
            store=order_store or store,
            seller=seller,
            status=status,
            sale_type=sale_type,
            total=Decimal(str(total)),
            completed_at=completed_at if status == Order.Status.COMPLETED else None,
        )

    return _make
