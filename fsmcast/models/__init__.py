from .channel import Channel as Channel
from .completion_set import CompletionSet as CompletionSet
from .coordinator_result import CoordinatorResult as CoordinatorResult
from .coordinator_status import CoordinatorStatus as CoordinatorStatus
from .envelope import Envelope as Envelope
from .message import Message as Message
from .worker_state import WorkerState as WorkerState
