from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.financing.api.v1.views import (
    FinancingRequestViewSet,
    ReferenceDataViewSet,
)

router = DefaultRouter()
router.register(r'reference-data', ReferenceDataViewSet, basename='reference-data')
router.register(r'requests', FinancingRequestViewSet, basename='financing-request')

urlpatterns = [
    path('', include(router.urls)),
]
