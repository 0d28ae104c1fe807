"""Connection sites a wire can start or end on."""
from dataclasses import dataclass
from enum import Enum

from models.transform import Vec2


class TerminalRole(Enum):
    SOURCE = 'source'  # may start a drawn wire
    TARGET = 'target'  # may end a drawn wire


@dataclass(frozen=True)
class Terminal:
    owner_id: str
    name: str
    position: Vec2
    role: TerminalRole
    on_transistor: bool = False

    @property
    def key(self):
        return (self.owner_id, self.name)
