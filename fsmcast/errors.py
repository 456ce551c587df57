class FsmcastError(Exception):
    pass


class AutomatonDefinitionError(FsmcastError):
    pass


class ProtocolViolationError(FsmcastError):
    pass


class TransportError(FsmcastError):
    pass
