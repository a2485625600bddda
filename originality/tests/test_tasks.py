# originality/tests/test_tasks.py
"""
測試原創性檢測 Celery 任務（重試、終態失敗、紀錄與事件）
"""
import uuid
from unittest.mock import patch

from django.test import TestCase

from originality.exceptions import DownloadError
from originality.jobs import CheckJob
from originality.models import OriginalityJobRecord
from originality.signals import originality_check_completed, originality_check_failed
from originality.tasks import run_originality_check
from submissions.models import Submission

from .utils import make_project, make_submission, make_user

Status = Submission.PlagiarismStatus


class RunOriginalityCheckTests(TestCase):

    def setUp(self):
        self.submission = make_submission(make_project(), make_user())
        self.job = CheckJob.for_submission(self.submission)
        self.events = []

    def _listen(self, signal):
        def receiver(sender, **kwargs):
            self.events.append(kwargs)
        signal.connect(receiver, weak=False)
        self.addCleanup(signal.disconnect, receiver)

    def _apply(self, **options):
        return run_originality_check.apply(
            args=(self.job.to_message(),),
            task_id=self.job.dedup_key,
            **options
        ).get()

    @patch('originality.tasks.process_check')
    def test_success_records_job_and_sends_signal(self, mock_process):
        mock_process.return_value = {'originality_score': 87, 'matched_sources': []}
        self._listen(originality_check_completed)

        result = self._apply()

        self.assertEqual(result['status'], 'completed')
        self.assertEqual(result['originality_score'], 87)
        mock_process.assert_called_once_with(self.job, job_id=self.job.dedup_key)

        record = OriginalityJobRecord.objects.get()
        self.assertEqual(record.state, OriginalityJobRecord.State.COMPLETED)
        self.assertEqual(record.attempts, 1)
        self.assertEqual(record.originality_score, 87)

        self.assertEqual(len(self.events), 1)
        self.assertEqual(self.events[0]['originality_score'], 87)
        self.assertEqual(self.events[0]['submission_id'], str(self.submission.pk))

    @patch('originality.tasks.process_check')
    def test_retries_then_fails(self, mock_process):
        """3 次嘗試都失敗 → failed，錯誤訊息寫入 submission"""
        mock_process.side_effect = DownloadError('Unable to download chapter.txt')
        self._listen(originality_check_failed)

        result = self._apply()

        self.assertEqual(mock_process.call_count, 3)
        self.assertEqual(result, {'status': 'failed', 'reason': 'Unable to download chapter.txt'})

        self.submission.refresh_from_db()
        self.assertEqual(self.submission.plagiarism_status, Status.FAILED)
        self.assertEqual(self.submission.plagiarism_error, 'Unable to download chapter.txt')
        self.assertIsNone(self.submission.plagiarism_score)

        record = OriginalityJobRecord.objects.get()
        self.assertEqual(record.state, OriginalityJobRecord.State.FAILED)
        self.assertEqual(record.attempts, 3)
        self.assertEqual(len(self.events), 1)

    @patch('originality.tasks.process_check')
    def test_transient_failure_recovers(self, mock_process):
        mock_process.side_effect = [
            DownloadError('timeout'),
            {'originality_score': 64, 'matched_sources': []},
        ]

        result = self._apply()

        self.assertEqual(result['status'], 'completed')
        self.assertEqual(mock_process.call_count, 2)
        self.assertEqual(OriginalityJobRecord.objects.get().attempts, 2)
        self.submission.refresh_from_db()
        self.assertIsNone(self.submission.plagiarism_error)

    @patch('originality.tasks.process_check')
    def test_terminal_submission_skipped(self, mock_process):
        Submission.objects.filter(pk=self.submission.pk).update(plagiarism_status=Status.COMPLETED)

        result = self._apply()

        self.assertEqual(result['status'], 'skipped')
        mock_process.assert_not_called()
        self.assertFalse(OriginalityJobRecord.objects.exists())

    @patch('originality.tasks.process_check')
    def test_missing_submission(self, mock_process):
        self.job = CheckJob(
            submission_id=str(uuid.uuid4()),
            storage_key='missing',
            file_type='text/plain',
            project_id=str(uuid.uuid4()),
        )

        result = self._apply()

        self.assertEqual(result, {'status': 'error', 'reason': 'submission_not_found'})
        mock_process.assert_not_called()

    def test_task_options(self):
        self.assertEqual(run_originality_check.max_retries, 2)
        self.assertEqual(run_originality_check.rate_limit, '10/m')
        self.assertEqual(run_originality_check.name, 'originality.tasks.run_originality_check')
