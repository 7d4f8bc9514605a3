"""Serializers for the back office API v1."""
from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import serializers

from commissions.models import CommissionPayment, CommissionTier
from commissions.periods import PERIOD_CHOICES
from goals.models import SalesGoal
from inventory.models import InventoryItem, InventoryMovement
from notifications.models import Notification
from workflows.actions import ACTIONS
from workflows.models import ReorderPoint, WorkflowExecution, WorkflowRule

User = get_user_model()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserSerializer(serializers.ModelSerializer):
    """Read serializer for User model."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name',
            'phone', 'role', 'position_type', 'is_active',
        ]
        read_only_fields = ['id', 'email', 'role', 'position_type', 'is_active']


class UserSummarySerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'position_type']


# ---------------------------------------------------------------------------
# Commissions
# ---------------------------------------------------------------------------

class CommissionTierSerializer(serializers.ModelSerializer):
    """Serializer for CommissionTier; the rate is a fraction (0.08 = 8 %)."""

    rate_percent = serializers.DecimalField(max_digits=7, decimal_places=2, read_only=True)
    user_name = serializers.CharField(source='user.get_full_name', read_only=True, default=None)

    class Meta:
        model = CommissionTier
        fields = [
            'id', 'tier_number', 'name', 'target_amount', 'commission_rate',
            'rate_percent', 'target_period', 'role_type', 'user', 'user_name',
            'is_active', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def validate(self, attrs):
        if attrs.get('role_type') == '':
            attrs['role_type'] = None
        role_type = attrs.get('role_type', getattr(self.instance, 'role_type', None))
        user = attrs.get('user', getattr(self.instance, 'user', None))
        if bool(role_type) == bool(user):
            raise serializers.ValidationError(
                "Un palier doit viser soit un poste, soit un employe (exactement un des deux)."
            )
        if role_type and role_type not in User.Position.values:
            raise serializers.ValidationError({'role_type': f"Poste inconnu: {role_type}"})
        return attrs


class TierRowSerializer(serializers.Serializer):
    """One row of a tier set submitted for replacement."""

    tier_number = serializers.IntegerField(min_value=1, required=False)
    name = serializers.CharField(max_length=60)
    target_amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'))
    commission_rate = serializers.DecimalField(
        max_digits=5, decimal_places=4, min_value=Decimal('0'), max_value=Decimal('1'),
    )
    target_period = serializers.ChoiceField(choices=PERIOD_CHOICES, required=False)
    role_type = serializers.ChoiceField(choices=User.Position.choices, required=False)
    is_active = serializers.BooleanField(required=False)


class TierReplaceSerializer(serializers.Serializer):
    """Input of the tier set replacement endpoint.

    Without ``user`` every row must carry a ``role_type`` and the role
    tiers of the business are replaced; with ``user`` the employee's own
    tiers are replaced.
    """

    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)
    tiers = TierRowSerializer(many=True, allow_empty=True)

    def validate(self, attrs):
        if not attrs.get('user'):
            missing = [i for i, row in enumerate(attrs['tiers'], start=1) if not row.get('role_type')]
            if missing:
                raise serializers.ValidationError(
                    {'tiers': f"Poste manquant pour les lignes {', '.join(map(str, missing))}."}
                )
        return attrs


class CommissionPaymentSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source='user.get_full_name', read_only=True)
    paid_by_name = serializers.CharField(source='paid_by.get_full_name', read_only=True, default=None)

    class Meta:
        model = CommissionPayment
        fields = [
            'id', 'user', 'user_name', 'period_type', 'period_label',
            'sale_amount', 'commission_rate', 'commission_amount', 'tier_name',
            'is_paid', 'paid_at', 'paid_by', 'paid_by_name', 'created_at',
        ]
        read_only_fields = fields


class CalculateCommissionsSerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=PERIOD_CHOICES, required=False)


class GoalProgressSerializer(serializers.Serializer):
    current_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    current_count = serializers.IntegerField()
    progress_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    days_remaining = serializers.IntegerField()
    remaining = serializers.DecimalField(max_digits=14, decimal_places=2)
    daily_needed = serializers.DecimalField(max_digits=14, decimal_places=2)


class DashboardGoalSerializer(GoalProgressSerializer):
    goal = serializers.SerializerMethodField()

    def get_goal(self, obj):
        return SalesGoalSerializer(obj['goal']).data


class CommissionDashboardSerializer(serializers.Serializer):
    """Period-to-date commission summary of the signed-in employee."""

    period = serializers.CharField()
    period_start = serializers.DateTimeField()
    period_end = serializers.DateTimeField()
    total_sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    order_count = serializers.IntegerField()
    opens_count = serializers.IntegerField()
    upsells_count = serializers.IntegerField()
    current_tier = serializers.CharField()
    commission_rate = serializers.DecimalField(max_digits=5, decimal_places=4)
    estimated_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    next_tier_target = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)
    progress_to_next_tier = serializers.DecimalField(max_digits=5, decimal_places=2)
    goals = DashboardGoalSerializer(many=True)


class PerformanceMetricSerializer(serializers.Serializer):
    user = UserSummarySerializer()
    position_type = serializers.CharField()
    monthly_sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    monthly_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    current_tier = serializers.CharField()
    commission_rate = serializers.DecimalField(max_digits=5, decimal_places=4)
    next_tier_target = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)
    progress_to_next_tier = serializers.DecimalField(max_digits=5, decimal_places=2)
    total_sales_ytd = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_commission_ytd = serializers.DecimalField(max_digits=14, decimal_places=2)


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class SalesGoalSerializer(serializers.ModelSerializer):
    """Serializer for SalesGoal. ``end_date`` is derived unless the goal is custom."""

    user_name = serializers.CharField(source='user.get_full_name', read_only=True, default=None)
    end_date = serializers.DateField(required=False)

    class Meta:
        model = SalesGoal
        fields = [
            'id', 'user', 'user_name', 'goal_type', 'target_amount', 'target_count',
            'current_count', 'start_date', 'end_date', 'position_type',
            'is_active', 'achieved_at', 'created_at',
        ]
        read_only_fields = ['id', 'achieved_at', 'created_at']

    def validate(self, attrs):
        instance = self.instance
        goal_type = attrs.get('goal_type', getattr(instance, 'goal_type', SalesGoal.GoalType.MONTHLY))
        target_amount = attrs.get('target_amount', getattr(instance, 'target_amount', None))
        target_count = attrs.get('target_count', getattr(instance, 'target_count', None))
        start_date = attrs.get('start_date', getattr(instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(instance, 'end_date', None))

        if not target_count and not (target_amount and target_amount > 0):
            raise serializers.ValidationError(
                "Un objectif doit avoir un montant ou un nombre cible positif."
            )
        if goal_type == SalesGoal.GoalType.CUSTOM:
            if not end_date:
                raise serializers.ValidationError({'end_date': "Date de fin requise pour un objectif personnalise."})
            if start_date and end_date < start_date:
                raise serializers.ValidationError(
                    {'end_date': "La date de fin doit etre posterieure a la date de debut."}
                )
        elif start_date and 'end_date' not in attrs:
            # Placeholder; SalesGoal.save derives the real end date.
            attrs['end_date'] = start_date
        return attrs


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

class InventoryItemSerializer(serializers.ModelSerializer):
    """Serializer for InventoryItem with its derived stock status."""

    product_name = serializers.CharField(source='product.name', read_only=True)
    product_sku = serializers.CharField(source='product.sku', read_only=True)
    store_name = serializers.CharField(source='store.name', read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)
    is_out_of_stock = serializers.BooleanField(read_only=True)
    stock_status = serializers.CharField(read_only=True)
    stock_status_label = serializers.CharField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id', 'store', 'store_name', 'product', 'product_name', 'product_sku',
            'quantity_on_hand', 'low_stock_threshold', 'max_stock',
            'is_low_stock', 'is_out_of_stock', 'stock_status', 'stock_status_label',
            'updated_at',
        ]
        read_only_fields = ['id', 'quantity_on_hand', 'updated_at']

    def validate(self, attrs):
        threshold = attrs.get('low_stock_threshold', getattr(self.instance, 'low_stock_threshold', 0))
        max_stock = attrs.get('max_stock', getattr(self.instance, 'max_stock', None))
        if max_stock is not None and max_stock < threshold:
            raise serializers.ValidationError(
                {'max_stock': "Le stock maximum doit etre superieur ou egal au seuil."}
            )
        return attrs


class InventoryMovementSerializer(serializers.ModelSerializer):
    """Serializer for InventoryMovement model."""

    actor_name = serializers.SerializerMethodField()

    class Meta:
        model = InventoryMovement
        fields = [
            'id', 'item', 'movement_type', 'quantity', 'quantity_after',
            'reference', 'reason', 'actor', 'actor_name', 'created_at',
        ]
        read_only_fields = fields

    def get_actor_name(self, obj):
        return obj.actor.get_full_name() if obj.actor else None


class StockAdjustSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()
    movement_type = serializers.ChoiceField(
        choices=InventoryMovement.MovementType.choices,
        default=InventoryMovement.MovementType.ADJUST,
    )
    reason = serializers.CharField(required=False, allow_blank=True, default='')
    reference = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_quantity(self, value):
        if value == 0:
            raise serializers.ValidationError("La variation de stock doit etre non nulle.")
        return value


# ---------------------------------------------------------------------------
# Workflows
# ---------------------------------------------------------------------------

class WorkflowRuleSerializer(serializers.ModelSerializer):
    class Meta:
        model = WorkflowRule
        fields = [
            'id', 'name', 'workflow_type', 'trigger_conditions', 'actions',
            'is_active', 'execution_count', 'last_triggered', 'created_at',
        ]
        read_only_fields = ['id', 'execution_count', 'last_triggered', 'created_at']

    INTEGER_CONDITIONS = ('stock_threshold', 'reorder_quantity')

    def validate_trigger_conditions(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Les conditions doivent etre un objet JSON.")
        for key in self.INTEGER_CONDITIONS:
            raw = value.get(key)
            if raw is None:
                continue
            if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
                raise serializers.ValidationError(f"{key} doit etre un entier positif ou nul.")
        categories = value.get('product_categories')
        if categories is not None and not (
            isinstance(categories, list) and all(isinstance(slug, str) for slug in categories)
        ):
            raise serializers.ValidationError("product_categories doit etre une liste de categories.")
        return value

    def validate_actions(self, value):
        if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
            raise serializers.ValidationError("Les actions doivent etre une liste de noms.")
        unknown = [name for name in value if name not in ACTIONS]
        if unknown:
            raise serializers.ValidationError(f"Actions inconnues: {', '.join(unknown)}")
        return value


class ReorderPointSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    store_name = serializers.CharField(source='store.name', read_only=True)
    supplier_name = serializers.SerializerMethodField()

    class Meta:
        model = ReorderPoint
        fields = [
            'id', 'store', 'store_name', 'product', 'product_name',
            'reorder_point', 'reorder_quantity', 'preferred_supplier', 'supplier_name',
            'auto_generate_po', 'is_active', 'last_triggered', 'created_at',
        ]
        read_only_fields = ['id', 'last_triggered', 'created_at']

    def get_supplier_name(self, obj):
        supplier = obj.supplier
        return supplier.name if supplier else None

    def validate_reorder_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError("La quantite a commander doit etre positive.")
        return value


class WorkflowExecutionSerializer(serializers.ModelSerializer):
    rule_name = serializers.CharField(source='rule.name', read_only=True)
    workflow_type = serializers.CharField(source='rule.workflow_type', read_only=True)

    class Meta:
        model = WorkflowExecution
        fields = [
            'id', 'rule', 'rule_name', 'workflow_type', 'inventory_item',
            'trigger_data', 'manual_trigger', 'status', 'action_results', 'error',
            'started_at', 'completed_at', 'resolved_at', 'created_at',
        ]
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            'id', 'user', 'notification_type', 'title', 'message', 'data',
            'is_read', 'read_at', 'created_at',
        ]
        read_only_fields = fields
