from .group_result import GroupResult as GroupResult
from .local_runner import LocalRunner as LocalRunner
from .local_worker_pool import LocalWorkerPool as LocalWorkerPool
