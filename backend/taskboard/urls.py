from django.urls import include, path

from todos.urls import api_urlpatterns, page_urlpatterns
from todos.views import HealthView

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("api/", include(api_urlpatterns)),
    path("", include(page_urlpatterns)),
]
