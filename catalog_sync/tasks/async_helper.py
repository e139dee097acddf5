import asyncio
from functools import wraps

from catalog_sync.tasks.celery_app import celery_app


def run_async(coro):
    """
    Run a coroutine to completion on the worker's event loop, creating one if needed.
    """
    try:
        loop = asyncio.get_event_loop()
        if loop.is_closed():
            raise RuntimeError
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


def celery_async_task(bind=True, max_retries=3, default_retry_delay=60 * 5, retry_on_error=True):
    """
    Register a coroutine function as a bound Celery task.

    Usage:
        @celery_async_task()
        async def sync_orders_from_shopify_task(self, store_id: str):
            async with open_record_store() as records:
                ...

    Exceptions escaping the coroutine trigger a retry unless ``retry_on_error`` is False.
    """
    def decorator(async_func):
        task_decorator = celery_app.task(
            bind=bind,
            max_retries=max_retries,
            default_retry_delay=default_retry_delay,
        )

        @task_decorator
        @wraps(async_func)
        def wrapper(self, *args, **kwargs):
            try:
                return run_async(async_func(self, *args, **kwargs))
            except Exception as exc:
                if not retry_on_error:
                    raise
                raise self.retry(exc=exc)

        return wrapper

    return decorator
