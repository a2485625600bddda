from django.urls import path
from .views import OriginalityStatusView

urlpatterns = [
    # GET /originality/<submission_id>/ -> 查詢檢測結果
    path('<uuid:submission_id>/', OriginalityStatusView.as_view(), name='originality-status'),
]
