# src/todo_home/home/render.py

"""
Plain-text rendering of view models.

Chat transports have no native "home tab", so the view is rendered as a text
block with the ids needed by the slash commands. Markup is Slack/Matrix-ish:
*bold* and ~struck~.
"""

from __future__ import annotations

from .view import (
    CompletedFooter,
    CreateButton,
    EmptyState,
    FilterSelector,
    FormKind,
    FormView,
    Header,
    HomeView,
    OpenCount,
    SectionLabel,
    TaskAction,
    TaskEntry,
)

_ACTION_HINTS = {
    TaskAction.COMPLETE: "/done {id}",
    TaskAction.EDIT: "/edit {id}",
    TaskAction.DELETE: "/delete {id}",
}


def _hints(task_id: int, actions: tuple[TaskAction, ...]) -> str:
    return "  ".join(_ACTION_HINTS[a].format(id=task_id) for a in actions)


def render_home_text(view: HomeView) -> str:
    lines: list[str] = []

    for section in view.sections:
        if isinstance(section, Header):
            lines.append(f"== {section.text} ==")
        elif isinstance(section, OpenCount):
            lines.append(f"*You have {section.count} open ToDo(s)*")
        elif isinstance(section, CreateButton):
            lines.append(f"[{section.label}] /new")
        elif isinstance(section, FilterSelector):
            opts = " ".join(
                f"({'x' if o.selected else ' '}) {o.label}" for o in section.options
            )
            lines.append(f"View: {opts}   /filter <overdue|upcoming|inbox>")
            lines.append("-" * 40)
        elif isinstance(section, SectionLabel):
            lines.append(f"*{section.text}*")
        elif isinstance(section, TaskEntry):
            lines.append(f"#{section.task_id} *{section.text}*")
            due = f"*{section.due_label}*" if section.overdue else section.due_label
            if section.assignee and section.assignee != view.user_id:
                due += f"  Assigned to: {section.assignee}"
            lines.append(f"    {due}")
            lines.append(f"    {_hints(section.task_id, section.actions)}")
        elif isinstance(section, EmptyState):
            lines.append(f"_{section.text}_")
        elif isinstance(section, CompletedFooter):
            lines.append("-" * 40)
            lines.append(f"*{section.title}:*")
            for entry in section.entries:
                text = f"~{entry.text}~" if entry.strikethrough else entry.text
                lines.append(f"#{entry.task_id} {text}    {_hints(entry.task_id, entry.actions)}")

    return "\n".join(lines)


def render_form_text(form: FormView) -> str:
    lines = [f"== {form.title} ==", form.heading]
    if form.error:
        lines.append(f"! {form.error}")

    if form.kind is FormKind.EDIT:
        lines.append(f"Text: {form.text or '—'}")
        lines.append(f"Due date: {form.due_date.isoformat() if form.due_date else '—'}")
        lines.append(f"Assigned to: {form.assignee or '—'}")
        # Ready to send as is: left-out options keep the values shown above.
        lines.append(f"{form.submit_label}: /update {form.task_id} {form.text or '<text>'}")
        lines.append("    change with due:YYYY-MM-DD, due:none, @assignee or @me")
    else:
        lines.append(f"{form.submit_label}: /add <text> [due:YYYY-MM-DD] [@assignee]")

    return "\n".join(lines)
