from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.context import SessionContext
from apps.accounts.permissions import HasProfile, IsRider, IsPartner
from apps.common.exceptions import AuthorizationError
from apps.pairing.services import NotPairedError
from .serializers import (
    RiderSettingsSerializer,
    DailyCostSerializer,
    AttendanceSerializer,
    AttendanceRangeSerializer,
    AttendanceRequestSerializer,
    SendRequestSerializer,
    RequestFilterSerializer,
)
from .services import (
    get_settings,
    set_daily_cost,
    mark_attendance,
    get_attendance_records,
    send_request,
    ignore_request,
    get_requests,
    get_request,
    InvalidAmountError,
    NoSettingsError,
    RequestNotFoundError,
    InvalidStateTransitionError,
    PartnerNotPairedError,
)


@extend_schema(
    methods=['GET'],
    responses={200: RiderSettingsSerializer},
    description="Get the daily petrol cost. Riders see their own, partners see their paired rider's.",
    tags=['travel'],
)
@extend_schema(
    methods=['PUT'],
    request=DailyCostSerializer,
    responses={200: RiderSettingsSerializer},
    description="Set the rider's daily petrol cost (0 to 10000). Existing attendance keeps its amount.",
    tags=['travel'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, HasProfile])
def rider_settings(request):
    """Get or update rider settings."""
    actor = SessionContext.for_user(request.user)

    if request.method == 'GET':
        try:
            obj = get_settings(actor=actor)
        except NoSettingsError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AuthorizationError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(RiderSettingsSerializer(obj).data)

    serializer = DailyCostSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        obj = set_daily_cost(
            actor=actor,
            daily_petrol_cost=serializer.validated_data['daily_petrol_cost'],
        )
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except AuthorizationError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(RiderSettingsSerializer(obj).data)


@extend_schema(
    request=None,
    responses={200: AttendanceSerializer},
    description="Mark today as present for the paired rider. Repeating the call replaces today's row.",
    tags=['travel'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPartner])
def mark_attendance_view(request):
    """Mark today's attendance."""
    try:
        attendance = mark_attendance(actor=SessionContext.for_user(request.user))
    except NotPairedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except NoSettingsError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(AttendanceSerializer(attendance).data)


@extend_schema(
    parameters=[
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Inclusive start'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='Inclusive end'),
    ],
    responses={200: AttendanceSerializer(many=True)},
    description="List attendance the caller is a party of.",
    tags=['travel'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasProfile])
def attendance_list(request):
    """List attendance records."""
    params = AttendanceRangeSerializer(data=request.query_params)
    params.is_valid(raise_exception=True)

    records = get_attendance_records(
        actor=SessionContext.for_user(request.user),
        start_date=params.validated_data.get('start_date'),
        end_date=params.validated_data.get('end_date'),
    )
    return Response(AttendanceSerializer(records, many=True).data)


@extend_schema(
    methods=['POST'],
    request=SendRequestSerializer,
    responses={201: AttendanceRequestSerializer},
    description="Ask a paired partner to mark today's attendance.",
    tags=['travel'],
)
@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('status', OpenApiTypes.STR, enum=['pending', 'completed', 'ignored']),
    ],
    responses={200: AttendanceRequestSerializer(many=True)},
    description="List requests the caller is a party of.",
    tags=['travel'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasProfile])
def requests_view(request):
    """List or send attendance requests."""
    actor = SessionContext.for_user(request.user)

    if request.method == 'GET':
        params = RequestFilterSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        queryset = get_requests(actor=actor, status=params.validated_data.get('status'))
        return Response(AttendanceRequestSerializer(queryset, many=True).data)

    if not IsRider().has_permission(request, None):
        return Response({'error': IsRider.message}, status=status.HTTP_403_FORBIDDEN)

    serializer = SendRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        attendance_request = send_request(
            actor=actor,
            partner_id=serializer.validated_data['partner_id'],
        )
    except PartnerNotPairedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(
        AttendanceRequestSerializer(attendance_request).data,
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    responses={200: AttendanceRequestSerializer},
    description="Get a single request the caller is a party of.",
    tags=['travel'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasProfile])
def request_detail(request, request_id):
    """Get one attendance request."""
    try:
        attendance_request = get_request(
            actor=SessionContext.for_user(request.user),
            request_id=request_id,
        )
    except RequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AuthorizationError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(AttendanceRequestSerializer(attendance_request).data)


@extend_schema(
    request=None,
    responses={200: AttendanceRequestSerializer},
    description="Ignore a pending request. Only pending requests can be ignored.",
    tags=['travel'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, HasProfile])
def ignore_request_view(request, request_id):
    """Ignore a pending request."""
    try:
        attendance_request = ignore_request(
            actor=SessionContext.for_user(request.user),
            request_id=request_id,
        )
    except RequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AuthorizationError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InvalidStateTransitionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(AttendanceRequestSerializer(attendance_request).data)
