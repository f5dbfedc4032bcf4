from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, inline_serializer

from apps.accounts.context import SessionContext
from apps.accounts.models import Profile
from apps.common.exceptions import ConflictError
from apps.accounts.permissions import IsRider, IsPartner
from .serializers import (
    PairingCodeSerializer,
    PairRequestSerializer,
    RiderSerializer,
    PartnerSerializer,
)
from .services import (
    regenerate_pairing_code,
    pair_with_rider,
    unpair,
    get_paired_partners,
    InvalidPairingCodeError,
    RiderNotFoundError,
    NotPairedError,
)


@extend_schema(
    responses={200: PairingCodeSerializer},
    description="Get the rider's pairing code to share with a partner.",
    tags=['pairing'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRider])
def my_code(request):
    """Get own pairing code."""
    profile = Profile.objects.only('pairing_code').get(user=request.user)
    return Response({'pairing_code': profile.pairing_code})


@extend_schema(
    request=None,
    responses={200: PairingCodeSerializer},
    description="Replace the rider's pairing code. Existing pairings are kept.",
    tags=['pairing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsRider])
def regenerate_code(request):
    """Regenerate own pairing code."""
    try:
        code = regenerate_pairing_code(actor=SessionContext.for_user(request.user))
    except ConflictError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response({'pairing_code': code})


@extend_schema(
    request=PairRequestSerializer,
    responses={200: inline_serializer(
        name='PairResponse',
        fields={'message': serializers.CharField(), 'rider': RiderSerializer()},
    )},
    description="Pair with a rider using their 6-character code. Case and surrounding spaces are ignored.",
    tags=['pairing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPartner])
def pair(request):
    """Pair with a rider by code."""
    serializer = PairRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        rider_profile = pair_with_rider(
            actor=SessionContext.for_user(request.user),
            code=serializer.validated_data['code'],
        )
    except InvalidPairingCodeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except RiderNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response({
        'message': 'Successfully paired',
        'rider': RiderSerializer(rider_profile).data,
    })


@extend_schema(
    request=None,
    responses={204: None},
    description="Remove the pairing with the current rider.",
    tags=['pairing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPartner])
def unpair_view(request):
    """Unpair from the current rider."""
    try:
        unpair(actor=SessionContext.for_user(request.user))
    except NotPairedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: PartnerSerializer(many=True)},
    description="List partners paired with the rider.",
    tags=['pairing'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRider])
def partners(request):
    """List own partners."""
    queryset = get_paired_partners(actor=SessionContext.for_user(request.user))
    return Response(PartnerSerializer(queryset, many=True).data)
