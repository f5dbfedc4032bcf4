from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.context import SessionContext
from apps.accounts.services import get_profile
from apps.accounts.permissions import HasProfile
from apps.pairing.services import get_paired_partners
from apps.travel.services import get_settings, NoSettingsError
from .analytics import AnalyticsQueries
from .serializers import (
    TimeseriesQuerySerializer,
    SummarySerializer,
    TimeseriesResponseSerializer,
    DashboardResponseSerializer,
    ErrorSerializer,
)
from .exceptions import AnalyticsServiceError


@extend_schema(
    responses={200: SummarySerializer},
    description="Totals, this month's sum, days this month, average per day and today's status.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasProfile])
def summary(request):
    """Get the current session's totals."""
    actor = SessionContext.for_user(request.user)
    data = AnalyticsQueries.summary(actor)
    return Response(SummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('view', OpenApiTypes.STR, enum=['day', 'month', 'year', 'all'],
                         description='Chart window (default month)'),
    ],
    responses={
        200: TimeseriesResponseSerializer,
        400: ErrorSerializer,
    },
    description="Get a dense daily series for charts, one entry per day ending today.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasProfile])
def timeseries(request):
    """Get chart data."""
    query_serializer = TimeseriesQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    view = query_serializer.validated_data['view']

    try:
        series = AnalyticsQueries.timeseries(SessionContext.for_user(request.user), view=view)
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(TimeseriesResponseSerializer({'view': view, 'data': series}).data)


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Get everything the rider or partner dashboard shows in one call.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasProfile])
def dashboard(request):
    """Get dashboard data for the current session."""
    actor = SessionContext.for_user(request.user)
    profile = get_profile(actor=actor)

    try:
        daily_petrol_cost = get_settings(actor=actor).daily_petrol_cost
    except NoSettingsError:
        daily_petrol_cost = None

    data = {
        'role': actor.role,
        'stats': AnalyticsQueries.summary(actor),
        'daily_petrol_cost': daily_petrol_cost,
        'pending_requests': AnalyticsQueries.pending_request_count(actor),
    }

    if actor.is_rider:
        data['pairing_code'] = profile.pairing_code
        data['partners'] = [
            {'user_id': p.user_id, 'email': p.email}
            for p in get_paired_partners(actor=actor)
        ]
    else:
        data['rider'] = profile.paired_rider

    return Response(DashboardResponseSerializer(data).data)
