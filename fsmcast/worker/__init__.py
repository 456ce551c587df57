from .worker import Worker as Worker
