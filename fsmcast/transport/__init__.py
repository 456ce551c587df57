from .local_transport import LocalEndpoint as LocalEndpoint
from .local_transport import LocalTransport as LocalTransport
from .process_transport import ProcessEndpoint as ProcessEndpoint
from .process_transport import ProcessTransport as ProcessTransport
from .transport import COORDINATOR_RANK as COORDINATOR_RANK
from .transport import Transport as Transport
from .transport import WorkerEndpoint as WorkerEndpoint
