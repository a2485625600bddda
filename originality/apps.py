from django.apps import AppConfig


class OriginalityConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'originality'

    def ready(self):
        """Import signal handlers，並建立佇列與 worker pool（不在這裡連線 broker）"""
        import originality.signals  # noqa

        from .queue import OriginalityQueue
        from .worker import OriginalityWorkerPool

        self.queue = OriginalityQueue()
        self.worker_pool = OriginalityWorkerPool(queue=self.queue)
