from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'houses'

router = DefaultRouter()
router.register(r'', views.HouseViewSet, basename='house')

urlpatterns = [
    # GET    /api/houses/                        - List user's houses
    # GET    /api/houses/{id}/                   - House detail with members
    # GET    /api/houses/{id}/members/           - List members
    # POST   /api/houses/{id}/add_member/        - Add tenant (landlord)
    # POST   /api/houses/{id}/remove_member/     - Remove tenant (landlord)
    path('', include(router.urls)),
]
