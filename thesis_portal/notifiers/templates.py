"""
Subject and body of the application decision email.

Pure functions of their arguments; the decision workflow supplies the data
and the notifier sends the result.
"""

from datetime import datetime

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def format_application_date(value: datetime) -> str:
    """``"dddd, DD/MM/YYYY"`` with English day names whatever the locale."""
    return f"{DAY_NAMES[value.weekday()]}, {value:%d/%m/%Y}"


def get_email_subject(decision: str) -> str:
    return f"Your thesis application has been {decision.lower()}"


def get_email_body(decision: str, proposal_id: str, proposal_title: str,
                   application_date: str, student: str, supervisor: str) -> str:
    if decision == "Accepted":
        outcome = (
            "we are pleased to inform you that your application has been accepted.\n"
            "Your supervisor will contact you soon to agree on the next steps."
        )
    else:
        outcome = (
            "we are sorry to inform you that your application has been rejected.\n"
            "You are welcome to apply to other thesis proposals."
        )

    return (
        f"Dear {student},\n\n"
        f"regarding your application of {application_date} to the thesis proposal\n"
        f"{proposal_id} - \"{proposal_title}\",\n"
        f"{outcome}\n\n"
        f"Best regards,\n"
        f"{supervisor}\n"
    )


def render_html(body: str) -> str:
    paragraphs = "".join(f"<p>{p.replace(chr(10), '<br>')}</p>" for p in body.split("\n\n") if p)
    return f"<html><body>{paragraphs}</body></html>"
