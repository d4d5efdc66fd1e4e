from skiff.core.api import Project, Purpose, SourceSet, Supplier, Task

project = Project.current()
project.apply_plugin("java")

# Extra properties on tasks.

project.task("myTask", lambda task: task.extra.set("myProperty", "myValue"))


def print_task_properties(task: Task) -> None:
    print(task.project.tasks["myTask"].extra["myProperty"])


project.task("printTaskProperties").do_last(print_task_properties)

# Named extra properties on the project and on source sets.

spring_version = project.extra.define("springVersion", "3.1.0.RELEASE")
email_notification = project.extra.define("emailNotification", Supplier.of_callable(lambda: "build@master.org"))

project.source_sets.all(lambda source_set: source_set.extra.set("purpose", None))

project.source_sets["main"].extra["purpose"] = Purpose.PRODUCTION
project.source_sets["test"].extra["purpose"] = Purpose.TEST
project.source_sets.create("plugin", lambda source_set: source_set.extra.set("purpose", Purpose.PRODUCTION))


def is_production(source_set: SourceSet) -> bool:
    return source_set.extra["purpose"] == Purpose.PRODUCTION


def print_properties(task: Task) -> None:
    print(spring_version.get())
    print(email_notification.get())
    for source_set in project.source_sets.matching(is_production):
        print(source_set.name)


project.task("printProperties").do_last(print_properties)
