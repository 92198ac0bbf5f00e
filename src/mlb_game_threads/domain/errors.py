from dataclasses import dataclass


@dataclass(frozen=True)
class GameThreadError:
    message: str


@dataclass(frozen=True)
class GatewayError(GameThreadError):
    endpoint: str
    status_code: int | None = None
