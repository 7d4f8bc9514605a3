"""API v1 views for the spa back office."""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import F, Q
from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.permissions import (
    IsAdminOrManager,
    IsBusinessMember,
    IsManagerOrReadOnly,
    resolve_business,
)
from api.v1.serializers import (
    CalculateCommissionsSerializer,
    CommissionDashboardSerializer,
    CommissionPaymentSerializer,
    CommissionTierSerializer,
    GoalProgressSerializer,
    InventoryItemSerializer,
    InventoryMovementSerializer,
    NotificationSerializer,
    PerformanceMetricSerializer,
    ReorderPointSerializer,
    SalesGoalSerializer,
    StockAdjustSerializer,
    TierReplaceSerializer,
    UserSerializer,
    WorkflowExecutionSerializer,
    WorkflowRuleSerializer,
)
from commissions.engine import CommissionEngine
from commissions.models import CommissionPayment, CommissionTier
from commissions.services import replace_employee_tiers, replace_role_tiers
from goals.models import SalesGoal
from goals.services import goal_progress
from inventory.models import InventoryItem
from inventory.services import adjust_stock
from notifications.models import Notification
from notifications.services import mark_all_read, notifications_for
from workflows.engine import manual_restock
from workflows.exceptions import WorkflowError
from workflows.models import ReorderPoint, WorkflowExecution, WorkflowRule

logger = logging.getLogger(__name__)


def _error_detail(exc):
    """Human readable message of a service-layer error."""
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, 'message_dict'):
            return exc.message_dict
        return ' '.join(exc.messages)
    return str(exc)


class BusinessScopedMixin:
    """Restrict querysets to the business of the requesting user."""

    business_field = 'business'

    def get_business(self):
        if not hasattr(self, '_business'):
            self._business = resolve_business(self.request, self)
        return self._business

    def get_queryset(self):
        qs = super().get_queryset()
        return qs.filter(**{self.business_field: self.get_business()})

    def check_employee(self, user):
        """Refuse a *user* who does not work in one of the business stores."""
        if user is not None and not user.store_users.filter(store__business=self.get_business()).exists():
            raise ValidationError({'user': "Cet employe n'appartient pas a votre entreprise."})


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class MeView(APIView):
    """GET / PATCH the signed-in user's profile."""

    def get(self, request):
        return Response(UserSerializer(request.user).data)

    def patch(self, request):
        serializer = UserSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


# ---------------------------------------------------------------------------
# Commissions
# ---------------------------------------------------------------------------

class CommissionTierViewSet(BusinessScopedMixin, viewsets.ModelViewSet):
    """
    CRUD for commission tiers.

    Filters: ``role_type``, ``user``, ``target_period``, ``is_active``.
    The ``replace`` action swaps a whole tier set atomically.
    """

    serializer_class = CommissionTierSerializer
    queryset = CommissionTier.objects.select_related('user')
    permission_classes = [IsAuthenticated, IsManagerOrReadOnly, IsBusinessMember]
    filterset_fields = ['role_type', 'user', 'target_period', 'is_active']
    ordering_fields = ['target_amount', 'tier_number', 'created_at']
    pagination_class = None

    def perform_create(self, serializer):
        self.check_employee(serializer.validated_data.get('user'))
        serializer.save(business=self.get_business())

    def perform_update(self, serializer):
        self.check_employee(serializer.validated_data.get('user'))
        serializer.save()

    @action(detail=False, methods=['post'], url_path='replace')
    def replace(self, request):
        """Replace the role tiers of the business, or all tiers of one employee."""
        serializer = TierReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        business = self.get_business()
        user = serializer.validated_data.get('user')
        rows = serializer.validated_data['tiers']

        self.check_employee(user)
        try:
            if user is None:
                tiers = replace_role_tiers(business, rows)
            else:
                tiers = replace_employee_tiers(business, user, rows)
        except (ValueError, DjangoValidationError) as e:
            return Response({'detail': _error_detail(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            CommissionTierSerializer(tiers, many=True).data,
            status=status.HTTP_201_CREATED,
        )


class CommissionPaymentViewSet(
    BusinessScopedMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Commission payments. Employees see their own; managers see everyone
    and can run a period calculation or mark a payment paid.
    """

    serializer_class = CommissionPaymentSerializer
    queryset = CommissionPayment.objects.select_related('user', 'paid_by')
    permission_classes = [IsAuthenticated, IsBusinessMember]
    filterset_fields = ['user', 'period_type', 'period_label', 'is_paid']
    ordering_fields = ['period_label', 'commission_amount', 'created_at']

    def get_queryset(self):
        qs = super().get_queryset()
        if not self.request.user.can_manage:
            qs = qs.filter(user=self.request.user)
        return qs

    @action(
        detail=False,
        methods=['post'],
        url_path='calculate',
        permission_classes=[IsAuthenticated, IsAdminOrManager],
    )
    def calculate(self, request):
        """Create or refresh the payments of the current period."""
        serializer = CalculateCommissionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        period = serializer.validated_data.get('period') or settings.COMMISSION_DEFAULT_PERIOD
        try:
            payments = CommissionEngine(self.get_business()).run_calculation(period)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(CommissionPaymentSerializer(payments, many=True).data)

    @action(
        detail=True,
        methods=['post'],
        url_path='mark-paid',
        permission_classes=[IsAuthenticated, IsAdminOrManager, IsBusinessMember],
    )
    def mark_paid(self, request, pk=None):
        payment = self.get_object()
        try:
            payment = CommissionEngine(self.get_business()).mark_paid(payment.pk, request.user)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(CommissionPaymentSerializer(payment).data)


class CommissionDashboardView(APIView):
    """
    GET the period-to-date commission summary of the signed-in employee.

    Managers may pass ``?user=<uuid>`` to look at one of their employees.
    """

    def get(self, request):
        business = resolve_business(request, self)
        user = request.user
        user_id = request.query_params.get('user')
        if user_id and str(user_id) != str(user.pk):
            if not user.can_manage:
                return Response(
                    {'detail': "Reserve aux managers et administrateurs."},
                    status=status.HTTP_403_FORBIDDEN,
                )
            engine = CommissionEngine(business)
            user = get_object_or_404(engine.employees(), pk=user_id)
        data = CommissionEngine(business).dashboard(user)
        return Response(CommissionDashboardSerializer(data).data)


class PerformanceMetricsView(APIView):
    """GET monthly and year-to-date figures of every employee, best sellers first."""

    permission_classes = [IsAuthenticated, IsAdminOrManager]

    def get(self, request):
        business = resolve_business(request, self)
        metrics = CommissionEngine(business).performance_metrics()
        return Response(PerformanceMetricSerializer(metrics, many=True).data)


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class SalesGoalViewSet(BusinessScopedMixin, viewsets.ModelViewSet):
    """
    CRUD for sales goals. Employees see their own goals and team goals.
    """

    serializer_class = SalesGoalSerializer
    queryset = SalesGoal.objects.select_related('user', 'business')
    permission_classes = [IsAuthenticated, IsManagerOrReadOnly, IsBusinessMember]
    filterset_fields = ['user', 'goal_type', 'position_type', 'is_active']
    ordering_fields = ['start_date', 'end_date', 'created_at']

    def get_queryset(self):
        qs = super().get_queryset()
        if not self.request.user.can_manage:
            qs = qs.filter(Q(user__isnull=True) | Q(user=self.request.user))
        return qs

    def perform_create(self, serializer):
        self.check_employee(serializer.validated_data.get('user'))
        serializer.save(business=self.get_business())

    def perform_update(self, serializer):
        self.check_employee(serializer.validated_data.get('user'))
        serializer.save()

    @action(detail=True, methods=['get'], url_path='progress')
    def progress(self, request, pk=None):
        goal = self.get_object()
        return Response(GoalProgressSerializer(goal_progress(goal)).data)


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

class InventoryItemViewSet(BusinessScopedMixin, viewsets.ModelViewSet):
    """
    Inventory items of the business stores.

    Quantities change only through ``adjust``, which records a movement
    and fires the low-stock workflows.
    """

    serializer_class = InventoryItemSerializer
    queryset = InventoryItem.objects.select_related('store', 'product')
    permission_classes = [IsAuthenticated, IsManagerOrReadOnly, IsBusinessMember]
    business_field = 'store__business'
    filterset_fields = ['store', 'product']
    search_fields = ['product__name', 'product__sku']
    ordering_fields = ['quantity_on_hand', 'low_stock_threshold', 'updated_at']
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def perform_create(self, serializer):
        store = serializer.validated_data['store']
        product = serializer.validated_data['product']
        business = self.get_business()
        if store.business_id != business.pk or product.business_id != business.pk:
            raise ValidationError("La boutique et le produit doivent appartenir a votre entreprise.")
        serializer.save()

    @action(detail=False, methods=['get'], url_path='low-stock')
    def low_stock(self, request):
        """Items at or below their threshold."""
        qs = self.filter_queryset(self.get_queryset()).filter(
            quantity_on_hand__lte=F('low_stock_threshold'),
        )
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(InventoryItemSerializer(page, many=True).data)
        return Response(InventoryItemSerializer(qs, many=True).data)

    @action(
        detail=True,
        methods=['post'],
        url_path='adjust',
        permission_classes=[IsAuthenticated, IsBusinessMember],
    )
    def adjust(self, request, pk=None):
        """Apply a signed quantity change and record the movement."""
        item = self.get_object()
        serializer = StockAdjustSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            adjust_stock(
                item,
                data['quantity'],
                data['movement_type'],
                reason=data['reason'],
                actor=request.user,
                reference=data['reference'],
            )
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        item.refresh_from_db()
        return Response(InventoryItemSerializer(item).data)

    @action(detail=True, methods=['get'], url_path='movements')
    def movements(self, request, pk=None):
        item = self.get_object()
        qs = item.movements.select_related('actor')
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(InventoryMovementSerializer(page, many=True).data)
        return Response(InventoryMovementSerializer(qs, many=True).data)

    @action(
        detail=True,
        methods=['post'],
        url_path='restock',
        permission_classes=[IsAuthenticated, IsAdminOrManager, IsBusinessMember],
    )
    def restock(self, request, pk=None):
        """Trigger the automatic reorder workflow for this item on demand."""
        item = self.get_object()
        try:
            execution = manual_restock(item)
        except WorkflowError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            WorkflowExecutionSerializer(execution).data,
            status=status.HTTP_202_ACCEPTED,
        )


# ---------------------------------------------------------------------------
# Workflows
# ---------------------------------------------------------------------------

class WorkflowRuleViewSet(BusinessScopedMixin, viewsets.ModelViewSet):
    """CRUD for workflow rules, managers only."""

    serializer_class = WorkflowRuleSerializer
    queryset = WorkflowRule.objects.all()
    permission_classes = [IsAuthenticated, IsAdminOrManager, IsBusinessMember]
    filterset_fields = ['workflow_type', 'is_active']
    ordering_fields = ['workflow_type', 'name', 'last_triggered']

    def perform_create(self, serializer):
        serializer.save(business=self.get_business())

    @action(detail=True, methods=['post'], url_path='toggle')
    def toggle(self, request, pk=None):
        rule = self.get_object()
        rule.is_active = not rule.is_active
        rule.save(update_fields=['is_active', 'updated_at'])
        logger.info("Workflow rule %s %s by %s", rule.pk, 'enabled' if rule.is_active else 'disabled', request.user)
        return Response(WorkflowRuleSerializer(rule).data)

    @action(detail=True, methods=['get'], url_path='executions')
    def executions(self, request, pk=None):
        rule = self.get_object()
        qs = rule.executions.select_related('rule')
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(WorkflowExecutionSerializer(page, many=True).data)
        return Response(WorkflowExecutionSerializer(qs, many=True).data)


class ReorderPointViewSet(BusinessScopedMixin, viewsets.ModelViewSet):
    """
    Per-store reorder points. Crossing one drafts a purchase order or asks
    the managers for a review.
    """

    serializer_class = ReorderPointSerializer
    queryset = ReorderPoint.objects.select_related('store', 'product__supplier', 'preferred_supplier')
    permission_classes = [IsAuthenticated, IsManagerOrReadOnly, IsBusinessMember]
    filterset_fields = ['store', 'product', 'is_active', 'auto_generate_po']
    ordering_fields = ['reorder_point', 'last_triggered']

    def _check_references(self, data):
        business = self.get_business()
        for field in ('store', 'product', 'preferred_supplier'):
            obj = data.get(field)
            if obj is not None and obj.business_id != business.pk:
                raise ValidationError({field: "Doit appartenir a votre entreprise."})

    def perform_create(self, serializer):
        self._check_references(serializer.validated_data)
        serializer.save(business=self.get_business())

    def perform_update(self, serializer):
        self._check_references(serializer.validated_data)
        serializer.save()


class WorkflowExecutionViewSet(
    BusinessScopedMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Read-only history of workflow executions."""

    serializer_class = WorkflowExecutionSerializer
    queryset = WorkflowExecution.objects.select_related('rule')
    permission_classes = [IsAuthenticated, IsAdminOrManager, IsBusinessMember]
    business_field = 'rule__business'
    filterset_fields = ['rule', 'inventory_item', 'status', 'manual_trigger']
    ordering_fields = ['created_at', 'completed_at']


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Read-only ViewSet for notifications with mark-read actions.

    Notifications are created by the system (workflows, goals), never
    directly via the API.
    """

    serializer_class = NotificationSerializer
    queryset = Notification.objects.all()
    filterset_fields = ['notification_type', 'is_read']
    ordering_fields = ['created_at']

    def get_queryset(self):
        business = resolve_business(self.request, self)
        return notifications_for(self.request.user, business)

    @action(detail=True, methods=['post'], url_path='mark-read')
    def mark_read(self, request, pk=None):
        """Mark a single notification as read."""
        notification = self.get_object()
        notification.mark_as_read()
        return Response(NotificationSerializer(notification).data)

    @action(detail=False, methods=['post'], url_path='mark-all-read')
    def mark_all_read(self, request):
        """Mark all unread notifications visible to the user as read."""
        updated = mark_all_read(request.user, resolve_business(request, self))
        return Response({'detail': f'{updated} notification(s) marquee(s) comme lue(s).'})
