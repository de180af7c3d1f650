from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("api/v1/financing/", include("apps.financing.api.v1.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
]
