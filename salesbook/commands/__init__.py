from salesbook.commands import (
    general, person, meeting, reminder, sale, tag,
)

ALL_GROUPS = [
    general, person, meeting, reminder, sale, tag,
]
