from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'members'

router = SimpleRouter()
router.register(r'', views.MemberViewSet, basename='member')

urlpatterns = [
    # GET    /api/members/                     - List members
    # POST   /api/members/                     - Create member
    # GET    /api/members/{id}/                - Get member
    # PATCH  /api/members/{id}/                - Update member
    # DELETE /api/members/{id}/                - Delete member
    # GET    /api/members/{id}/deletion-check/ - Can the member be deleted?
    path('', include(router.urls)),
]
