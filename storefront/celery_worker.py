# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# explicite import taskow, zeby worker je zarejestrowal
celery_app.conf.imports = (
    "storefront.services.notification_service",
)

celery_app.conf.timezone = "UTC"
# w testach/dev bez brokera task wykonuje sie od razu w procesie
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.task_store_eager_result = False
