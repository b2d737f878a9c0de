from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .permissions import HasChurch
from .serializers import ChurchSerializer


@extend_schema(
    responses={200: ChurchSerializer},
    description="Get the church the current user belongs to.",
    tags=['churches'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasChurch])
def current_church(request):
    """Return the requesting user's church."""
    return Response(ChurchSerializer(request.user.church).data)
