from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'counts'

router = SimpleRouter()
router.register(r'counts', views.CountViewSet, basename='count')
router.register(r'donations', views.DonationViewSet, basename='donation')

urlpatterns = [
    # GET    /api/counts/                      - List counts
    # POST   /api/counts/                      - Open a count
    # GET    /api/counts/{id}/                 - Get count
    # POST   /api/counts/{id}/finalize/        - Finalize count
    # GET    /api/counts/finalized/            - Finalized counts by date
    # GET    /api/counts/latest-finalized/     - Latest finalized count
    # GET    /api/counts/{id}/donations/       - List donations
    # POST   /api/counts/{id}/donations/       - Record donation
    # DELETE /api/donations/{id}/              - Remove donation
    path('', include(router.urls)),
]
