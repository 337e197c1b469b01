from html import escape


def donation_thank_you_subject(name: str = "") -> str:
    if name:
        return f"Thank you for your donation, {name}!"
    return "Thank you for your donation!"


def donation_thank_you_html(name: str = "") -> str:
    greeting = f"Hi {escape(name)}," if name else "Hi,"
    lines = [
        "<div style=\"font-family: sans-serif; line-height: 1.5;\">",
        f"<p>{greeting}</p>",
        "<p>Thank you for your donation! Your support keeps this project going.</p>",
        "<p>Your account has been updated and your supporter status is now active.</p>",
        "<p>With gratitude,<br>The team</p>",
        "</div>",
    ]
    return "\n".join(lines)
