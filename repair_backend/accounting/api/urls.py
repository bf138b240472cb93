# accounting/api/urls.py

from django.urls import path

from accounting.api.views import ProfitAndLossView

urlpatterns = [
    # Reports
    path("profit-and-loss/", ProfitAndLossView.as_view(), name="profit-and-loss"),
]
