from ulid import ULID


def new_ulid(prefix: str | None = None) -> str:
    value = str(ULID()).lower()
    return f"{prefix}{value}" if prefix else value


def new_participant_id() -> str:
    return new_ulid("pt_")


def new_share_id() -> str:
    return new_ulid("sh_")


def new_banner_id() -> str:
    return new_ulid("bn_")


def new_destination_id() -> str:
    return new_ulid("ds_")


def new_session_id() -> str:
    return new_ulid("se_")
