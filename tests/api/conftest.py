import pytest
from django.test import Client


@pytest.fixture
def manager_client(store_user_manager, manager_user):
    client = Client()
    client.force_login(manager_user)
    return client


@pytest.fixture
def sales_client(store_user_sales, sales_user):
    client = Client()
    client.force_login(sales_user)
    return client


@pytest.fixture
def other_manager(other_store):
    from accounts.models import User
    from stores.models import StoreUser

    user = User.objects.create_user(
        email="manager@other.test",
        password="testpass123",
        first_name="Other",
        last_name="Manager",
        role=User.Role.MANAGER,
    )
    StoreUser.objects.create(store=other_store, user=user, is_default=True)
    return user


@pytest.fixture
def other_client(other_manager):
    client = Client()
    client.force_login(other_manager)
    return client
