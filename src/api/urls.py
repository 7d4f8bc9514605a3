"""Main API URL router for /api/v1/."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from api.v1 import views as v1_views

router = DefaultRouter()
router.register(r'commission-tiers', v1_views.CommissionTierViewSet, basename='commission-tier')
router.register(r'commission-payments', v1_views.CommissionPaymentViewSet, basename='commission-payment')
router.register(r'goals', v1_views.SalesGoalViewSet, basename='goal')
router.register(r'inventory', v1_views.InventoryItemViewSet, basename='inventory-item')
router.register(r'reorder-points', v1_views.ReorderPointViewSet, basename='reorder-point')
router.register(r'workflow-rules', v1_views.WorkflowRuleViewSet, basename='workflow-rule')
router.register(r'workflow-executions', v1_views.WorkflowExecutionViewSet, basename='workflow-execution')
router.register(r'notifications', v1_views.NotificationViewSet, basename='notification')


app_name = 'api'
urlpatterns = [
    path('', include(router.urls)),

    # Auth endpoints
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', v1_views.MeView.as_view(), name='auth-me'),

    # Commissions
    path('commissions/dashboard/', v1_views.CommissionDashboardView.as_view(), name='commission-dashboard'),
    path('commissions/performance/', v1_views.PerformanceMetricsView.as_view(), name='commission-performance'),
]
