import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "canteen_api.settings")

celery = Celery("canteen_api")
celery.config_from_object("django.conf:settings", namespace="CELERY")
celery.autodiscover_tasks()
