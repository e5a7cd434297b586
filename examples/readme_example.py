from dataclasses import dataclass, field
from enum import Enum

from objmapper import Mapper, MapperSettings, MappingConfiguration, MappingService


class TaskStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass
class Assignee:
    name: str
    email: str


@dataclass
class Task:
    description: str
    status: TaskStatus
    assignee: Assignee | None = None
    labels: list[str] = field(default_factory=list)


@dataclass
class AssigneeView:
    name: str = ""
    email: str = ""


@dataclass
class TaskView:
    """API-facing view of a task.

    description, status, assignee and labels are filled automatically by name.
    summary is computed by an override.
    """

    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    assignee: AssigneeView | None = None
    labels: list[str] = field(default_factory=list)
    summary: str = ""


configuration = MappingConfiguration()


@configuration.override(Task, TaskView, config_name="Api")
def summarize(src: Task, dst: TaskView) -> None:
    owner = src.assignee.name if src.assignee else "nobody"
    dst.summary = f"{src.description} ({src.status.value}, {owner})"


@configuration.override(Task, TaskView, config_name="Api")
def redact_email(src: Task, dst: TaskView) -> None:
    if dst.assignee is not None:
        dst.assignee.email = "***"


service = MappingService(Mapper(configuration, MapperSettings(freeze_configuration=True)))

if __name__ == "__main__":
    task = Task(
        description="Write docs",
        status=TaskStatus.PENDING,
        assignee=Assignee(name="Ann", email="ann@example.com"),
        labels=["docs", "p1"],
    )

    print(service.map(task, TaskView))
    print(service.map(task, TaskView, "Api"))

    for entry in configuration.resolve("Api"):
        print(f"{entry.fn.__name__}: used {entry.usage_count} time(s)")
