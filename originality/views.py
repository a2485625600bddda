from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from submissions.models import Submission
from user.permissions import IsFacultyOrStaff

from . import state


# ===================================================================
def api_response(data=None, message="OK", status_code=200):
    status_str = "ok" if 200 <= status_code < 400 else "error"
    return Response(
        {"data": data, "message": message, "status": status_str},
        status=status_code
    )


class OriginalityStatusView(APIView):
    """
    GET /originality/<submission_id>/ -> 查詢原創性檢測結果

    只有上傳者本人，或指導老師/管理員可以查看
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, submission_id):
        owner_id = (
            Submission.objects
            .filter(pk=submission_id)
            .values_list('submitted_by_id', flat=True)
            .first()
        )
        if owner_id is None:
            return api_response(None, "找不到此份繳交", status_code=404)

        is_owner = owner_id == request.user.pk
        if not is_owner and not IsFacultyOrStaff().has_permission(request, self):
            return api_response(None, "沒有權限查看此份檢測結果", status_code=403)

        result = state.get_status(submission_id)
        if result is None:
            return api_response(None, "找不到此份繳交", status_code=404)

        msg = "成功取得檢測結果" if result['status'] == 'completed' else f"檢測狀態：{result['status']}"
        return api_response(result, msg)
