"""
原創性檢測 Worker

使用方式：
    python manage.py originality_worker
    python manage.py originality_worker --concurrency 2 --pool prefork
"""

from django.apps import apps
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = 'Run the originality check worker in the foreground'

    def add_arguments(self, parser):
        parser.add_argument('--concurrency', type=int, default=None)
        parser.add_argument('--pool', default='prefork')
        parser.add_argument('--loglevel', default='INFO')

    def handle(self, *args, **options):
        pool = apps.get_app_config('originality').worker_pool
        concurrency = options['concurrency'] or pool.concurrency
        self.stdout.write(self.style.SUCCESS(
            f"Starting originality worker on '{pool.queue_name}' "
            f"(concurrency={concurrency}, pool={options['pool']})"
        ))
        pool.run(
            concurrency=concurrency,
            pool=options['pool'],
            loglevel=options['loglevel'],
        )
