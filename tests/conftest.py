import io
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def _render_pdf(pages: list[list[str]]) -> bytes:
    """Draw each page's lines top-down and return the PDF bytes."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    for lines in pages:
        y = 780
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def contract_pdf_bytes() -> bytes:
    """Single-page rental contract."""
    return _render_pdf([["Rental Agreement", "Tenant: Jane Doe", "Monthly rent: 1200 EUR"]])


@pytest.fixture()
def statement_pdf_bytes() -> bytes:
    """Two-page bank statement with one period per page."""
    return _render_pdf(
        [
            ["Statement period: January 2024", "Closing balance: 5400.00"],
            ["Statement period: February 2024", "Closing balance: 5150.00"],
        ]
    )


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """Valid PDF whose only page carries no text layer."""
    return _render_pdf([[]])


@pytest.fixture()
def contract_pdf_file(tmp_path: Path, contract_pdf_bytes: bytes) -> Path:
    path = tmp_path / "contract.pdf"
    path.write_bytes(contract_pdf_bytes)
    return path
