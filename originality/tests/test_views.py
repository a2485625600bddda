# originality/tests/test_views.py
"""
測試 OriginalityStatusView (GET /originality/<submission_id>/)
權限邏輯：上傳者本人、指導老師或管理員才能查看
"""
import uuid

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from originality import state
from user.models import User

from .utils import make_project, make_submission, make_user


class OriginalityStatusViewTest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.author = make_user()
        self.classmate = make_user()
        self.adviser = make_user(identity=User.Identity.ADVISER)
        self.staff = make_user(is_staff=True)

        self.submission = make_submission(make_project(adviser=self.adviser), self.author)
        self.url = reverse('originality-status', args=[self.submission.pk])

    def test_author_sees_queued_status(self):
        self.client.force_authenticate(user=self.author)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'ok')
        self.assertEqual(response.data['data']['status'], 'queued')
        self.assertIsNone(response.data['data']['score'])

    def test_completed_result(self):
        matches = [{'source_id': 'abc', 'title': 'Library Robot', 'chapter': 1, 'match_percentage': 40}]
        state.mark_processing(self.submission.pk)
        state.mark_completed(self.submission.pk, 71, matches)

        self.client.force_authenticate(user=self.adviser)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], '成功取得檢測結果')
        self.assertEqual(response.data['data']['score'], 71)
        self.assertEqual(response.data['data']['matches'], matches)
        self.assertIsNotNone(response.data['data']['processed_at'])

    def test_failed_result_exposes_error_only(self):
        state.mark_failed(self.submission.pk, 'Cannot extract text from an empty buffer.')

        self.client.force_authenticate(user=self.staff)
        response = self.client.get(self.url)

        self.assertEqual(response.data['data']['status'], 'failed')
        self.assertEqual(response.data['data']['error'], 'Cannot extract text from an empty buffer.')
        self.assertIsNone(response.data['data']['score'])

    def test_other_student_forbidden(self):
        self.client.force_authenticate(user=self.classmate)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['status'], 'error')

    def test_unknown_submission(self):
        self.client.force_authenticate(user=self.staff)
        response = self.client.get(reverse('originality-status', args=[uuid.uuid4()]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_requires_authentication(self):
        response = self.client.get(self.url)
        self.assertIn(response.status_code, [status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN])
