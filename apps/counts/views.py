from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.churches.permissions import HasChurch, IsChurchAdmin
from apps.members.services import MemberNotFoundError

from .models import CountStatus
from .serializers import (
    CountSerializer,
    CountCreateSerializer,
    FinalizeCountSerializer,
    DonationSerializer,
    DonationCreateSerializer,
    ReceiptSummarySerializer,
)
from .services import (
    list_counts,
    create_count,
    finalize_count,
    list_finalized_counts,
    get_latest_finalized_count,
    list_donations,
    add_donation,
    remove_donation,
    send_donation_receipts,
    # Exceptions
    CountNotFoundError,
    DonationNotFoundError,
    CountFinalizedError,
    InvalidStatusTransitionError,
    InvalidDonationError,
    CountNotFinalizedError,
)


class CountPagination(PageNumberPagination):
    """Custom pagination for counts."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CountViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for collection counts.

    list: Get the church's counts (optional ?status=OPEN|FINALIZED)
    create: Open a new count
    retrieve: Get a specific count
    finalize: Finalize an open count (admin only)
    send_receipts: Mail pending and failed donor receipts (admin only)
    finalized: All finalized counts ordered by date
    latest_finalized: Most recent finalized count
    donations: List or record donations of a count
    """

    serializer_class = CountSerializer
    permission_classes = [IsAuthenticated, HasChurch]
    pagination_class = CountPagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        """Return only counts of the user's church."""
        status_filter = self.request.query_params.get('status')
        if status_filter not in CountStatus.values:
            status_filter = None
        return list_counts(church_id=self.request.user.church_id, status=status_filter)

    def get_permissions(self):
        if self.action in ('finalize', 'send_receipts'):
            return [IsAuthenticated(), HasChurch(), IsChurchAdmin()]
        return [IsAuthenticated(), HasChurch()]

    @extend_schema(parameters=[OpenApiParameter('status', str, enum=CountStatus.values)])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=CountCreateSerializer, responses={201: CountSerializer})
    def create(self, request, *args, **kwargs):
        """Open a new count."""
        serializer = CountCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        count = create_count(
            church_id=request.user.church_id,
            **serializer.validated_data
        )

        return Response(CountSerializer(count).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=FinalizeCountSerializer, responses={200: CountSerializer})
    @action(detail=True, methods=['post'])
    def finalize(self, request, pk=None):
        """Finalize an open count."""
        serializer = FinalizeCountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            count = finalize_count(
                count_id=pk,
                church_id=request.user.church_id,
                finalized_by=request.user,
                **serializer.validated_data
            )
        except CountNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidStatusTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(CountSerializer(count).data)

    @extend_schema(request=None, responses={200: ReceiptSummarySerializer})
    @action(detail=True, methods=['post'], url_path='send-receipts')
    def send_receipts(self, request, pk=None):
        """Mail the count's outstanding donor receipts, retrying failed ones."""
        try:
            summary = send_donation_receipts(
                count_id=pk,
                church_id=request.user.church_id,
                include_failed=True,
            )
        except CountNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CountNotFinalizedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(ReceiptSummarySerializer(summary).data)

    @extend_schema(responses={200: CountSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def finalized(self, request):
        """All finalized counts of the user's church, oldest first."""
        counts = list_finalized_counts(church_id=request.user.church_id)
        return Response(CountSerializer(counts, many=True).data)

    @extend_schema(responses={200: CountSerializer})
    @action(detail=False, methods=['get'], url_path='latest-finalized')
    def latest_finalized(self, request):
        """Most recent finalized count of the user's church."""
        try:
            count = get_latest_finalized_count(church_id=request.user.church_id)
        except CountNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(CountSerializer(count).data)

    @extend_schema(request=DonationCreateSerializer, responses={200: DonationSerializer(many=True), 201: DonationSerializer})
    @action(detail=True, methods=['get', 'post'])
    def donations(self, request, pk=None):
        """List the count's donations or record a new one."""
        church_id = request.user.church_id

        if request.method == 'GET':
            try:
                donations = list_donations(count_id=pk, church_id=church_id)
            except CountNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            return Response(DonationSerializer(donations, many=True).data)

        serializer = DonationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            donation = add_donation(
                church_id=church_id,
                count_id=pk,
                amount=data['amount'],
                donation_type=data['donation_type'],
                member_id=data.get('member'),
                check_number=data.get('check_number', ''),
                date=data.get('date'),
                notes=data.get('notes', ''),
            )
        except (CountNotFoundError, MemberNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CountFinalizedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidDonationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DonationSerializer(donation).data, status=status.HTTP_201_CREATED)


class DonationViewSet(viewsets.GenericViewSet):
    """
    Donation removal.

    destroy: Remove a donation from its (open) count
    """

    serializer_class = DonationSerializer
    permission_classes = [IsAuthenticated, HasChurch]
    lookup_value_regex = r'\d+'

    def destroy(self, request, pk=None):
        """Remove a donation from an open count."""
        try:
            remove_donation(donation_id=pk, church_id=request.user.church_id)
        except DonationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CountFinalizedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)
