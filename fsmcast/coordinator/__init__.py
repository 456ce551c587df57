from .coordinator import Coordinator as Coordinator
from .policies import AcknowledgmentPolicy as AcknowledgmentPolicy
from .policies import FixedRoundPolicy as FixedRoundPolicy
from .policies import TerminationPolicy as TerminationPolicy
