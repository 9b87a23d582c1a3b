from django.urls import path

from .views import EffectiveQueryLimitsView

urlpatterns = [
    path("effective", EffectiveQueryLimitsView.as_view(), name="limits-effective"),
]
