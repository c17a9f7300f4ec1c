from dataclasses import dataclass


# --- Configuration ---
DEFAULT_PORT = 80
DEFAULT_READ_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class TransportConfig:
    """
    Per-request transport settings.

    `port` is used when the URL's domain carries no explicit port.
    `timeout` is in seconds; None blocks indefinitely.
    """
    port: int = DEFAULT_PORT
    timeout: float | None = None
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be in 1..65535, got {self.port}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.read_chunk_size <= 0:
            raise ValueError(f"read_chunk_size must be positive, got {self.read_chunk_size}")
