"""CLI commands for the records system.

Commands:
- shell: interactive menu over a fresh in-memory records system
- version: print the installed version

State lives only for the duration of a shell session; use the export
menu option to keep a plain-text dump.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import typer
from rich.console import Console
from rich.table import Table

from registrar import __version__
from registrar.config.app_config import load_app_config
from registrar.core.analytics import class_statistics, student_gpa, system_statistics
from registrar.core.audit import AuditLevel
from registrar.core.errors import RegistrarError
from registrar.core.exporter import export_to_file
from registrar.core.records import AcademicRecords
from registrar.utils.validators import validate_email, validate_phone

app = typer.Typer(
    name="registrar",
    help="Student records, enrollments, grades and analytics.",
    no_args_is_help=True,
)

console = Console()

LEVEL_STYLES = {
    AuditLevel.INFO: "blue",
    AuditLevel.WARNING: "yellow",
    AuditLevel.ERROR: "red",
    AuditLevel.SUCCESS: "green",
}


def _fmt(value: float | None, spec: str = ".2f", missing: str = "N/A") -> str:
    return missing if value is None else format(value, spec)


# =============================================================================
# STUDENT ACTIONS
# =============================================================================


def _add_student(records: AcademicRecords, out: Console) -> None:
    name = typer.prompt("Student name").strip()
    email = typer.prompt("Email address", default="").strip()
    phone = typer.prompt("Phone number", default="").strip()
    address = typer.prompt("Address", default="").strip()
    admission_year = typer.prompt("Admission year", type=int)
    major = typer.prompt("Major", default="").strip()

    student = records.registry.add_student(
        name=name,
        email=email,
        phone=phone,
        address=address,
        admission_year=admission_year,
        major=major,
    )
    if email and not validate_email(email):
        out.print("[yellow]⚠ Email format may be invalid[/yellow]")
    if phone and not validate_phone(phone):
        out.print("[yellow]⚠ Phone number format may be invalid[/yellow]")
    out.print(f"[green]✓ Student added successfully with ID: {student.student_id}[/green]")


def _list_students(records: AcademicRecords, out: Console) -> None:
    students = records.registry.list_students()
    if not students:
        out.print("[dim]No students in the system.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Major")
    for s in students:
        table.add_row(str(s.student_id), s.name, s.email, s.phone, s.major)
    out.print(table)
    out.print(f"Total Active Students: {len(students)}")


def _search_students(records: AcademicRecords, out: Console) -> None:
    query = typer.prompt("Name to search")
    matches = records.registry.search_by_name(query)
    if not matches:
        out.print(f"[yellow]No students found matching '{query}'[/yellow]")
        return
    for s in matches:
        out.print(f"  {s.student_id}: {s.name} <{s.email}> {s.major}")
    out.print(f"Found {len(matches)} student(s)")


def _student_details(records: AcademicRecords, out: Console) -> None:
    student_id = typer.prompt("Student ID", type=int)
    try:
        student = records.registry.find_student(student_id)
    except RegistrarError:
        records.audit.warning("Display Student", "Student ID not found")
        raise

    out.print(f"[bold]Student ID:[/bold]      {student.student_id}")
    out.print(f"[bold]Name:[/bold]            {student.name}")
    out.print(f"[bold]Email:[/bold]           {student.email}")
    out.print(f"[bold]Phone:[/bold]           {student.phone}")
    out.print(f"[bold]Address:[/bold]         {student.address}")
    out.print(f"[bold]Admission Year:[/bold]  {student.admission_year}")
    out.print(f"[bold]Major:[/bold]           {student.major}")
    out.print(f"[bold]Registration:[/bold]    {student.registration_date}")


def _deactivate_student(records: AcademicRecords, out: Console) -> None:
    student_id = typer.prompt("Student ID", type=int)
    if not typer.confirm(f"Deactivate student {student_id}?", default=False):
        out.print("[dim]Cancelled.[/dim]")
        return
    records.registry.deactivate_student(student_id)
    out.print(f"[green]✓ Student {student_id} deactivated[/green]")


def _reactivate_student(records: AcademicRecords, out: Console) -> None:
    student_id = typer.prompt("Student ID", type=int)
    records.registry.reactivate_student(student_id)
    out.print(f"[green]✓ Student {student_id} reactivated[/green]")


# =============================================================================
# COURSE ACTIONS
# =============================================================================


def _add_course(records: AcademicRecords, out: Console) -> None:
    code = typer.prompt("Course code (e.g., CS101)").strip()
    name = typer.prompt("Course name").strip()
    description = typer.prompt("Description", default="").strip()
    credits = typer.prompt("Credits", type=int)
    max_capacity = typer.prompt("Maximum capacity", type=int)
    difficulty = typer.prompt("Difficulty level (1.0 - 5.0)", type=float, default=1.0)

    course = records.catalog.add_course(
        code=code,
        name=name,
        credits=credits,
        max_capacity=max_capacity,
        description=description,
        difficulty_level=difficulty,
    )
    out.print(f"[green]✓ Course added successfully with ID: {course.course_id}[/green]")


def _list_courses(records: AcademicRecords, out: Console) -> None:
    courses = records.catalog.list_courses()
    if not courses:
        out.print("[dim]No courses in the system.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Code")
    table.add_column("Name")
    table.add_column("Credits", justify="right")
    table.add_column("Capacity", justify="right")
    table.add_column("Enrolled", justify="right")
    table.add_column("Difficulty", justify="right")
    for c in courses:
        table.add_row(
            str(c.course_id),
            c.code,
            c.name,
            str(c.credits),
            str(c.max_capacity),
            str(c.current_enrollment),
            f"{c.difficulty_level:.1f}",
        )
    out.print(table)
    out.print(f"Total Courses: {len(courses)}")


def _course_details(records: AcademicRecords, out: Console) -> None:
    course_id = typer.prompt("Course ID", type=int)
    try:
        course = records.catalog.find_course(course_id)
    except RegistrarError:
        records.audit.warning("Display Course", "Course ID not found")
        raise

    out.print(f"[bold]Course ID:[/bold]           {course.course_id}")
    out.print(f"[bold]Course Code:[/bold]         {course.code}")
    out.print(f"[bold]Course Name:[/bold]         {course.name}")
    out.print(f"[bold]Description:[/bold]         {course.description}")
    out.print(f"[bold]Credits:[/bold]             {course.credits}")
    out.print(f"[bold]Maximum Capacity:[/bold]    {course.max_capacity}")
    out.print(f"[bold]Current Enrollment:[/bold]  {course.current_enrollment}")
    out.print(f"[bold]Enrollment Rate:[/bold]     {_fmt(course.enrollment_rate, '.1%')}")
    out.print(f"[bold]Difficulty Level:[/bold]    {course.difficulty_level:.1f}/5.0")
    out.print(f"[bold]Available Seats:[/bold]     {course.available_seats}")
    if course.is_full:
        out.print("[yellow]Course is full.[/yellow]")


# =============================================================================
# ENROLLMENT ACTIONS
# =============================================================================


def _enroll(records: AcademicRecords, out: Console) -> None:
    student_id = typer.prompt("Student ID", type=int)
    course_id = typer.prompt("Course ID", type=int)
    enrollment = records.engine.enroll(student_id, course_id)
    out.print("[green]✓ Student successfully enrolled in course![/green]")
    out.print(f"  [dim]Enrollment ID:[/dim] {enrollment.enrollment_id}")


def _student_enrollments(records: AcademicRecords, out: Console) -> None:
    student_id = typer.prompt("Student ID", type=int)
    records.registry.get_student(student_id)
    enrollments = records.engine.enrollments_by_student(student_id)
    if not enrollments:
        out.print("[dim]Student has no enrollments.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Enr.ID", style="cyan")
    table.add_column("Course Name")
    table.add_column("Course Code")
    table.add_column("Credits", justify="right")
    table.add_column("Grade", justify="right")
    table.add_column("Status")
    for e in enrollments:
        course = records.catalog.find_course(e.course_id)
        grade = "-" if e.grade is None else f"{e.grade:.1f} ({e.letter_grade})"
        table.add_row(
            str(e.enrollment_id),
            course.name,
            course.code,
            str(course.credits),
            grade,
            e.status.label,
        )
    out.print(table)
    out.print(f"Total Enrollments: {len(enrollments)}")


def _record_grade(records: AcademicRecords, out: Console) -> None:
    enrollment_id = typer.prompt("Enrollment ID", type=int)
    grade = typer.prompt("Grade (0-100)", type=float)
    enrollment = records.engine.record_grade(enrollment_id, grade)
    out.print("[green]✓ Grade recorded successfully![/green]")
    out.print(f"  [dim]Grade:[/dim]      {enrollment.grade:.2f} ({enrollment.letter_grade})")
    out.print(f"  [dim]GPA Points:[/dim] {enrollment.credit_points:.2f}")


def _drop_enrollment(records: AcademicRecords, out: Console) -> None:
    enrollment_id = typer.prompt("Enrollment ID", type=int)
    enrollment = records.engine.drop_enrollment(enrollment_id)
    out.print(
        f"[green]✓ Enrollment {enrollment.enrollment_id} dropped "
        f"(course {enrollment.course_id})[/green]"
    )


# =============================================================================
# ANALYTICS / LOG / EXPORT ACTIONS
# =============================================================================


def _student_gpa(records: AcademicRecords, out: Console) -> None:
    student_id = typer.prompt("Student ID", type=int)
    report = student_gpa(records, student_id)
    out.print(f"[bold]Student:[/bold] {report.name} ({report.student_id})")
    out.print(f"[bold]Completed Courses:[/bold] {report.completed_courses}")
    if report.has_data:
        out.print(f"[bold]GPA:[/bold] {report.gpa:.2f}")
    else:
        out.print("[bold]GPA:[/bold] N/A (No completed courses)")


def _system_statistics(records: AcademicRecords, out: Console) -> None:
    stats = system_statistics(records)
    out.print(f"Total Students (Active):    {stats.student_count}")
    out.print(f"Total Courses:              {stats.course_count}")
    out.print(f"Total Enrollments:          {stats.enrollment_count}")
    out.print(f"Total Log Entries:          {stats.log_entry_count}")
    if stats.average_system_gpa is not None:
        out.print(f"Average GPA (System):       {stats.average_system_gpa:.2f}")
    if stats.average_enrollment_rate is not None:
        out.print(f"Average Enrollment Rate:    {stats.average_enrollment_rate:.1%}")


def _class_statistics(records: AcademicRecords, out: Console) -> None:
    course_id = typer.prompt("Course ID", type=int)
    stats = class_statistics(records, course_id)
    out.print(f"[bold]Course:[/bold] {stats.name} ({stats.code})")
    out.print(f"Total Enrollment: {stats.total_enrollment}")
    out.print(f"Students Graded: {stats.count_graded}")
    if stats.count_graded == 0:
        out.print("[dim]No grades recorded for this course.[/dim]")
        return
    out.print(f"Average Grade: {stats.average:.2f}")
    out.print(f"Highest Grade: {stats.maximum:.2f}")
    out.print(f"Lowest Grade: {stats.minimum:.2f}")
    out.print(f"Grade Range: {stats.range:.2f}")


def _show_log(records: AcademicRecords, out: Console) -> None:
    entries = records.audit_entries()
    if not entries:
        out.print("[dim]No log entries.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Level")
    table.add_column("Timestamp")
    table.add_column("Operation")
    table.add_column("Details")
    for entry in entries:
        style = LEVEL_STYLES[entry.level]
        table.add_row(
            str(entry.log_id),
            f"[{style}]{entry.level.value}[/{style}]",
            entry.timestamp,
            entry.operation,
            entry.details,
        )
    out.print(table)
    out.print(f"Total Log Entries: {len(entries)}")


def _export(records: AcademicRecords, out: Console) -> None:
    default_path = records.config.export.default_path
    raw_path = typer.prompt("Export file", default=default_path)
    try:
        path = export_to_file(records.snapshot(), Path(raw_path), audit=records.audit)
    except OSError as e:
        out.print(f"[red]✗ Could not create export file: {e}[/red]")
        return
    out.print(f"[green]✓ Data exported successfully to '{path}'[/green]")


# =============================================================================
# SHELL
# =============================================================================

MenuAction = Callable[[AcademicRecords, Console], None]

MENU: list[tuple[str, MenuAction]] = [
    ("Add Student", _add_student),
    ("Display All Students", _list_students),
    ("Search Student by Name", _search_students),
    ("View Student Details", _student_details),
    ("Add Course", _add_course),
    ("Display All Courses", _list_courses),
    ("View Course Details", _course_details),
    ("Enroll Student in Course", _enroll),
    ("View Student Enrollments", _student_enrollments),
    ("Record Grade", _record_grade),
    ("Calculate Student GPA", _student_gpa),
    ("Display System Statistics", _system_statistics),
    ("Generate Class Statistics", _class_statistics),
    ("Display System Log", _show_log),
    ("Export Data to File", _export),
    ("Drop Enrollment", _drop_enrollment),
    ("Deactivate Student", _deactivate_student),
    ("Reactivate Student", _reactivate_student),
]

EXIT_CHOICE = len(MENU) + 1


def _print_menu(out: Console) -> None:
    out.print("\n" + "=" * 50)
    out.print("[bold cyan]STUDENT MANAGEMENT AND ANALYTICS SYSTEM[/bold cyan]")
    out.print("=" * 50)
    for number, (label, _) in enumerate(MENU, 1):
        out.print(f"  {number:>2}. {label}")
    out.print(f"  {EXIT_CHOICE:>2}. Exit System")


def run_menu_choice(records: AcademicRecords, choice: int, out: Console) -> bool:
    """Run one menu option.

    Returns False when the user chose to exit or input ended inside the
    action's own prompts.
    """
    if choice == EXIT_CHOICE:
        return False
    if not 1 <= choice <= len(MENU):
        out.print(f"[yellow]⚠ Invalid choice. Enter a number from 1 to {EXIT_CHOICE}.[/yellow]")
        records.audit.warning("Menu", "Invalid input received")
        return True

    _, action = MENU[choice - 1]
    try:
        action(records, out)
    except RegistrarError as e:
        out.print(f"[red]✗ {e.message}[/red]")
    except typer.Abort:
        return False
    return True


@app.command()
def shell() -> None:
    """Interactive menu over an in-memory records system."""
    records = AcademicRecords(load_app_config())
    console.print("[blue]System ready.[/blue]")

    while True:
        _print_menu(console)
        try:
            choice = typer.prompt(f"Enter your choice (1-{EXIT_CHOICE})", type=int)
        except typer.Abort:
            break
        if not run_menu_choice(records, choice, console):
            break

    console.print("[dim]Goodbye.[/dim]")


@app.command()
def version() -> None:
    """Show the installed version."""
    console.print(f"registrar {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
