from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.churches.permissions import HasChurch, IsChurchAdmin

from .serializers import (
    MemberSerializer,
    MemberListSerializer,
    DeletionEligibilitySerializer,
    MemberDeleteConflictSerializer,
    MemberErrorSerializer,
)
from .services import (
    list_members,
    get_member,
    create_member,
    update_member,
    delete_member,
    can_delete_member,
    # Exceptions
    MemberNotFoundError,
    MemberHasOpenCountsError,
)


class MemberPagination(PageNumberPagination):
    """Custom pagination for members."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class MemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for church members.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get the church's members (optional ?search=)
    create: Add a member
    retrieve: Get a specific member
    update / partial_update: Edit a member
    destroy: Delete a member (admin only, refused while in open counts)
    deletion_check: Report whether a member can be deleted
    """

    serializer_class = MemberSerializer
    lookup_value_regex = r'\d+'
    permission_classes = [IsAuthenticated, HasChurch]
    pagination_class = MemberPagination

    def get_queryset(self):
        """Return only members of the user's church."""
        return list_members(
            church_id=self.request.user.church_id,
            search=self.request.query_params.get('search'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return MemberListSerializer
        return MemberSerializer

    def get_permissions(self):
        if self.action == 'destroy':
            return [IsAuthenticated(), HasChurch(), IsChurchAdmin()]
        return [IsAuthenticated(), HasChurch()]

    @extend_schema(parameters=[OpenApiParameter('search', str, description='Filter by name or email')])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        """Create a member in the user's church."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = create_member(
            church_id=request.user.church_id,
            **serializer.validated_data
        )

        return Response(MemberSerializer(member).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a member."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            member = update_member(
                member_id=instance.id,
                church_id=request.user.church_id,
                **serializer.validated_data
            )
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(MemberSerializer(member).data)

    @extend_schema(responses={204: None, 404: MemberErrorSerializer, 409: MemberDeleteConflictSerializer})
    def destroy(self, request, *args, **kwargs):
        """Delete a member unless they have donations in open counts."""
        try:
            delete_member(member_id=self.kwargs['pk'], church_id=request.user.church_id)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except MemberHasOpenCountsError as e:
            return Response(
                {'error': str(e), 'openCounts': e.open_counts},
                status=status.HTTP_409_CONFLICT
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: DeletionEligibilitySerializer, 404: MemberErrorSerializer})
    @action(detail=True, methods=['get'], url_path='deletion-check')
    def deletion_check(self, request, pk=None):
        """Report whether the member can be deleted and which open counts block it."""
        try:
            member = get_member(member_id=pk, church_id=request.user.church_id)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        eligibility = can_delete_member(member.id, request.user.church_id)
        return Response(eligibility.to_dict())
