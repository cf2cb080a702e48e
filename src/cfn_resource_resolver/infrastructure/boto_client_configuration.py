from botocore.config import Config


def boto_client_configuration(connect_timeout: float, read_timeout: float, max_attempts: int) -> Config:
    # Standard retry mode backs off exponentially with jitter on throttling and transient errors
    return Config(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries=dict(mode='standard', max_attempts=max_attempts)
    )
