"""
原創性檢測統計 Management Command

使用方式：
    python manage.py originality_jobs
    python manage.py originality_jobs --prune
"""

from django.core.management.base import BaseCommand
from django.db.models import Count

from originality.models import OriginalityJobRecord
from submissions.models import Submission


class Command(BaseCommand):
    help = 'Display originality check statistics'

    def add_arguments(self, parser):
        parser.add_argument('--prune', action='store_true', help='Apply job record retention now')

    def handle(self, *args, **options):
        if options['prune']:
            for job_state in OriginalityJobRecord.State:
                deleted = OriginalityJobRecord.prune(job_state)
                self.stdout.write(f"Pruned {deleted} {job_state.value} job records")

        counts = dict(
            Submission.objects
            .values_list('plagiarism_status')
            .annotate(total=Count('id'))
        )

        self.stdout.write("\n" + "=" * 70)
        self.stdout.write(self.style.SUCCESS("Originality Check Report"))
        self.stdout.write("=" * 70)

        for status in Submission.PlagiarismStatus:
            style = self.style.ERROR if status == Submission.PlagiarismStatus.FAILED \
                else self.style.SUCCESS if status == Submission.PlagiarismStatus.COMPLETED \
                else self.style.WARNING
            self.stdout.write(f"{status.label:<20} {style(str(counts.get(status.value, 0)))}")

        self.stdout.write("-" * 70)
        for job_state in OriginalityJobRecord.State:
            kept = OriginalityJobRecord.objects.filter(state=job_state).count()
            limit = OriginalityJobRecord.retention_limit(job_state)
            self.stdout.write(f"{job_state.label + ' jobs':<20} {kept}/{limit}")

        self.stdout.write("=" * 70 + "\n")
