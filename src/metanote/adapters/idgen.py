import secrets

from ..core.ports import IdGenerator


class HexId(IdGenerator):
    """Random lowercase hex ids, two characters per byte."""

    def __init__(self, nbytes: int = 6):
        if nbytes < 1:
            raise ValueError("nbytes must be positive")
        self.nbytes = nbytes

    def new_id(self) -> str:
        return secrets.token_hex(self.nbytes)
