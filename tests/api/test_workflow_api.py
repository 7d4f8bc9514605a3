"""Workflow rule, execution and notification endpoints."""
import pytest

from notifications.models import Notification
from notifications.services import create_notification
from workflows.models import WorkflowExecution, WorkflowRule

RULES_URL = "/api/v1/workflow-rules/"
EXECUTIONS_URL = "/api/v1/workflow-executions/"
NOTIFICATIONS_URL = "/api/v1/notifications/"


@pytest.mark.django_db
def test_manager_creates_and_toggles_a_rule(manager_client, business):
    payload = {
        "name": "Alerte",
        "workflow_type": "stock_alert",
        "trigger_conditions": {"stock_threshold": 3},
        "actions": ["send_notification", "notify_manager"],
    }
    response = manager_client.post(RULES_URL, payload, content_type="application/json")
    assert response.status_code == 201
    rule_id = response.json()["id"]
    assert WorkflowRule.objects.get().business == business

    response = manager_client.post(f"{RULES_URL}{rule_id}/toggle/")
    assert response.json()["is_active"] is False
    response = manager_client.post(f"{RULES_URL}{rule_id}/toggle/")
    assert response.json()["is_active"] is True


@pytest.mark.django_db
def test_unknown_actions_are_refused(manager_client):
    payload = {"name": "X", "workflow_type": "stock_alert", "actions": ["launch_rocket"]}
    response = manager_client.post(RULES_URL, payload, content_type="application/json")
    assert response.status_code == 400
    assert "actions" in response.json()


@pytest.mark.django_db
@pytest.mark.parametrize(
    "conditions",
    [
        {"stock_threshold": "beaucoup"},
        {"stock_threshold": "3"},
        {"stock_threshold": -1},
        {"reorder_quantity": 2.5},
        {"product_categories": "cheveux"},
    ],
)
def test_malformed_trigger_conditions_are_refused(manager_client, conditions):
    payload = {
        "name": "Alerte", "workflow_type": "stock_alert",
        "trigger_conditions": conditions, "actions": ["send_notification"],
    }
    response = manager_client.post(RULES_URL, payload, content_type="application/json")

    assert response.status_code == 400
    assert "trigger_conditions" in response.json()
    assert not WorkflowRule.objects.exists()


@pytest.mark.django_db
def test_rules_are_manager_only(sales_client):
    assert sales_client.get(RULES_URL).status_code == 403
    assert sales_client.get(EXECUTIONS_URL).status_code == 403


@pytest.mark.django_db
def test_execution_history(manager_client, other_client, business, inventory_item):
    rule = WorkflowRule.objects.create(business=business, name="Alerte", workflow_type="stock_alert")
    execution = WorkflowExecution.objects.create(rule=rule, inventory_item=inventory_item)

    response = manager_client.get(f"{RULES_URL}{rule.pk}/executions/")
    assert [row["id"] for row in response.json()["results"]] == [str(execution.pk)]

    response = manager_client.get(EXECUTIONS_URL, {"status": "pending"})
    assert response.json()["count"] == 1
    assert response.json()["results"][0]["workflow_type"] == "stock_alert"

    assert other_client.get(EXECUTIONS_URL).json()["count"] == 0


@pytest.mark.django_db
def test_notifications_personal_and_business_wide(sales_client, business, other_business, sales_user, manager_user):
    create_notification(business, Notification.Type.INVENTORY_ALERT, "Stock", "Stock faible")
    create_notification(business, Notification.Type.GOAL_ACHIEVED, "Bravo", "Objectif", user=sales_user)
    create_notification(business, Notification.Type.WORKFLOW, "Manager", "Pour le manager", user=manager_user)
    create_notification(other_business, Notification.Type.INVENTORY_ALERT, "Ailleurs", "Autre")

    response = sales_client.get(NOTIFICATIONS_URL)

    titles = {row["title"] for row in response.json()["results"]}
    assert titles == {"Stock", "Bravo"}


@pytest.mark.django_db
def test_mark_read_and_mark_all_read(sales_client, business, sales_user):
    first = create_notification(business, Notification.Type.INVENTORY_ALERT, "Un", "1")
    create_notification(business, Notification.Type.GOAL_ACHIEVED, "Deux", "2", user=sales_user)
    create_notification(business, Notification.Type.GOAL_ACHIEVED, "Trois", "3", user=sales_user)

    response = sales_client.post(f"{NOTIFICATIONS_URL}{first.pk}/mark-read/")
    assert response.status_code == 200
    assert response.json()["is_read"] is True
    assert response.json()["read_at"] is not None

    response = sales_client.post(NOTIFICATIONS_URL + "mark-all-read/")
    assert response.json()["detail"] == "2 notification(s) marquee(s) comme lue(s)."
    assert not Notification.objects.filter(is_read=False).exists()

    unread = sales_client.get(NOTIFICATIONS_URL, {"is_read": "false"}).json()
    assert unread["count"] == 0


@pytest.mark.django_db
def test_me_endpoint_keeps_position_read_only(sales_client, sales_user):
    response = sales_client.patch(
        "/api/v1/auth/me/",
        {"first_name": "Samia", "position_type": "manager"},
        content_type="application/json",
    )

    assert response.status_code == 200
    sales_user.refresh_from_db()
    assert sales_user.first_name == "Samia"
    assert sales_user.position_type == "sales_associate"


@pytest.mark.django_db
def test_user_without_business_is_refused(client, admin_user):
    client.force_login(admin_user)
    assert client.get(NOTIFICATIONS_URL).status_code == 403


@pytest.mark.django_db
def test_anonymous_requests_are_refused(client):
    response = client.get(NOTIFICATIONS_URL)
    assert response.status_code in (401, 403)
