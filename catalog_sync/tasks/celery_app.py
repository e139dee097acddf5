from celery import Celery
from celery.schedules import crontab

from catalog_sync.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    'catalog_sync',
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=['catalog_sync.tasks.shopify_sync']
)

celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
)

# Order import for every active store; webhooks cover changes in between
celery_app.conf.beat_schedule = {
    'schedule-periodic-order-syncs': {
        'task': 'catalog_sync.tasks.shopify_sync.schedule_periodic_order_syncs',
        'schedule': crontab(minute=settings.ORDER_SYNC_SCHEDULE_MINUTE),
    },
}

if __name__ == '__main__':
    celery_app.start()
