"""Printable documents generated from the form payloads.

Each document is drawn on a single A4 portrait page with Pillow: a title,
the form fields as label/value rows, CODE128 barcodes (python-barcode) for
the values the yard scans, and on the collection order a QR code (segno)
carrying the OS. The page is saved as PDF.

  - collection order        ORDEM DE COLETA
  - pre-stacking minute     MINUTA DE CHEIO – ALS
  - empty release minute    MINUTA DE LIBERAÇÃO DE CNTR VAZIO
  - empty return minute     MINUTA DE DEVOLUÇÃO DE CONTAINER VAZIO
"""

import io
import logging
from dataclasses import dataclass

import barcode
import segno
from barcode.errors import BarcodeError
from barcode.writer import ImageWriter
from PIL import Image, ImageDraw, ImageFont

from als.schemas.driver import Driver
from als.schemas.forms import (
    CollectionOrderForm,
    EmptyReleaseForm,
    EmptyReturnForm,
    FormModel,
    PreStackingForm,
)
from als.schemas.party import Customer, Port
from als.services.storage import StorageFacade
from als.utils.masks import format_br_date, mask_cnpj, mask_cpf, mask_plate

logger = logging.getLogger(__name__)

COMPANY = "ALS TRANSPORTES"

# A4 at 150 DPI
PAGE_WIDTH = 1240
PAGE_HEIGHT = 1754
MARGIN = 80
RESOLUTION = 150.0


@dataclass
class DocumentParties:
    driver: Driver | None = None
    sender: Customer | None = None
    destination: Port | None = None


@dataclass
class RenderedDocument:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


async def resolve_parties(storage: StorageFacade, form: FormModel) -> DocumentParties:
    """Look up the driver, sender and destination (port or yard) a form names."""
    driver = next((d for d in await storage.get_drivers() if d.id == form.driver_id), None)
    sender = next((c for c in await storage.get_customers() if c.id == form.remetente_id), None)
    destination = None
    if form.destinatario_id:
        places = [*await storage.get_ports(), *await storage.get_pre_stacking()]
        destination = next((p for p in places if p.id == form.destinatario_id), None)
    return DocumentParties(driver=driver, sender=sender, destination=destination)


# ── File names ──────────────────────────────────────────────────

def _driver_name(parties: DocumentParties) -> str:
    return parties.driver.name if parties.driver and parties.driver.name else "MOTORISTA"


def collection_order_filename(form: CollectionOrderForm, parties: DocumentParties) -> str:
    return f"OC - {_driver_name(parties)} - {form.os or 'SEM_OS'}.pdf"


def pre_stacking_filename(form: PreStackingForm, parties: DocumentParties) -> str:
    return f"Minuta Pre-Stacking - {_driver_name(parties)} - {form.os or 'SEM_OS'}.pdf"


def empty_release_filename(form: EmptyReleaseForm, parties: DocumentParties) -> str:
    return f"LIBERAÇÃO DE VAZIO - {_driver_name(parties)} - {form.manual_local or 'NÃO INFORMADO'}.pdf"


def empty_return_filename(form: EmptyReturnForm, parties: DocumentParties) -> str:
    return f"DEVOLUÇÃO DE VAZIO - {_driver_name(parties)} - {form.container or 'VAZIO'}.pdf"


# ── Page drawing ────────────────────────────────────────────────

def _load_fonts() -> tuple:
    try:
        return (
            ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 40),
            ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 22),
            ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", 24),
        )
    except OSError:
        default = ImageFont.load_default()
        return default, default, default


class _Page:
    """A blank A4 page with a cursor moving down as content is added."""

    def __init__(self, title: str):
        self.image = Image.new("RGB", (PAGE_WIDTH, PAGE_HEIGHT), color="white")
        self.draw = ImageDraw.Draw(self.image)
        self.title_font, self.label_font, self.value_font = _load_fonts()
        self.y = MARGIN
        self._centered(COMPANY, self.label_font)
        self.y += 40
        self._centered(title, self.title_font)
        self.y += 70
        self.draw.line((MARGIN, self.y, PAGE_WIDTH - MARGIN, self.y), fill="black", width=3)
        self.y += 30

    def _text(self, xy: tuple[int, int], text: str, font) -> None:
        if not isinstance(font, ImageFont.FreeTypeFont):
            # Bitmap fallback font only covers latin-1
            text = text.encode("latin-1", "replace").decode("latin-1")
        self.draw.text(xy, text, fill="black", font=font)

    def _centered(self, text: str, font) -> None:
        bbox = self.draw.textbbox((0, 0), text, font=font)
        self._text(((PAGE_WIDTH - (bbox[2] - bbox[0])) // 2, self.y), text, font)

    def row(self, label: str, value: str | None) -> None:
        self._text((MARGIN, self.y), f"{label}:", self.label_font)
        self._text((MARGIN + 330, self.y), value or "-", self.value_font)
        self.y += 42

    def section(self, heading: str) -> None:
        self.y += 20
        self._text((MARGIN, self.y), heading, self.label_font)
        self.y += 34
        self.draw.line((MARGIN, self.y, PAGE_WIDTH - MARGIN, self.y), fill="black", width=1)
        self.y += 16

    def barcode(self, label: str, value: str) -> None:
        if not value:
            return
        try:
            code128 = barcode.get_barcode_class("code128")
            image = code128(value, writer=ImageWriter()).render({
                "write_text": False,
                "module_width": 0.3,
                "module_height": 12.0,
                "quiet_zone": 2.0,
                "background": "white",
                "foreground": "black",
            })
        except BarcodeError as e:
            logger.warning(f"Barcode for {label} not rendered ({value!r}): {e}")
            self.row(label, value)
            return
        width = min(image.width, PAGE_WIDTH - 2 * MARGIN - 330)
        image = image.resize((width, 90), Image.Resampling.BILINEAR)
        self._text((MARGIN, self.y + 30), f"{label}:", self.label_font)
        self.image.paste(image, (MARGIN + 330, self.y))
        self._text((MARGIN + 330, self.y + 95), value, self.value_font)
        self.y += 140

    def qr(self, data: str) -> None:
        """QR code in the top-right corner."""
        if not data:
            return
        buf = io.BytesIO()
        segno.make(data).save(buf, kind="png", scale=6, border=2)
        buf.seek(0)
        image = Image.open(buf).convert("RGB")
        self.image.paste(image, (PAGE_WIDTH - MARGIN - image.width, MARGIN))

    def signature(self, caption: str) -> None:
        y = PAGE_HEIGHT - MARGIN - 60
        x0, x1 = PAGE_WIDTH // 2 - 300, PAGE_WIDTH // 2 + 300
        self.draw.line((x0, y, x1, y), fill="black", width=2)
        bbox = self.draw.textbbox((0, 0), caption, font=self.label_font)
        self._text(((PAGE_WIDTH - (bbox[2] - bbox[0])) // 2, y + 10), caption, self.label_font)

    def to_pdf(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, "PDF", resolution=RESOLUTION)
        return buf.getvalue()


def _driver_rows(page: _Page, driver: Driver | None) -> None:
    page.section("MOTORISTA")
    page.row("NOME", driver.name if driver else "")
    page.row("CPF", mask_cpf(driver.cpf) if driver else "")
    page.row("CAVALO", mask_plate(driver.plate_horse) if driver else "")
    page.row("CARRETA", mask_plate(driver.plate_trailer) if driver else "")


def city_state(place: Customer | Port | None) -> str:
    """``CITY/UF``, leaving out whichever part is blank."""
    if place is None:
        return ""
    return "/".join(part for part in (place.city, place.state) if part)


def _place_rows(page: _Page, heading: str, place: Customer | Port | None) -> None:
    page.section(heading)
    page.row("NOME", place.name if place else "")
    page.row("CNPJ", mask_cnpj(place.cnpj) if place and place.cnpj else "")
    page.row("CIDADE", city_state(place))


# ── Documents ───────────────────────────────────────────────────

def render_collection_order(form: CollectionOrderForm, parties: DocumentParties) -> RenderedDocument:
    page = _Page("ORDEM DE COLETA")
    page.qr(form.os)
    page.row("DATA", form.display_date or format_br_date(form.date))
    page.row("OS", form.os)
    page.row("OPERAÇÃO", form.tipo_operacao)
    page.row("BOOKING", form.booking)
    page.row("NAVIO", form.ship)
    page.row("ARMADOR", form.agencia)
    page.row("TIPO", f"{form.tipo} {form.padrao}")
    page.row("GENSET", form.genset)
    page.row("AUT. COLETA", form.aut_coleta)
    page.row("EMBARCADOR", form.embarcador)
    page.row("AGENDAMENTO", form.horario_agendado)
    page.barcode("CONTAINER", form.container)
    page.barcode("TARA", form.tara)
    page.barcode("LACRE", form.seal)
    _place_rows(page, "REMETENTE", parties.sender)
    _place_rows(page, "DESTINATÁRIO", parties.destination)
    _driver_rows(page, parties.driver)
    page.row("OBS", form.obs)
    page.signature("ASSINATURA DO MOTORISTA")
    return RenderedDocument(collection_order_filename(form, parties), page.to_pdf())


def render_pre_stacking(form: PreStackingForm, parties: DocumentParties) -> RenderedDocument:
    page = _Page("MINUTA DE CHEIO – ALS")
    page.row("DATA", form.display_date or format_br_date(form.date))
    page.row("OS", form.os)
    page.row("NOTA FISCAL", form.nf)
    page.row("BOOKING", form.booking)
    page.row("NAVIO", form.ship)
    page.row("ARMADOR", form.agencia)
    page.row("TIPO", form.tipo)
    page.row("AUT. COLETA", form.aut_coleta)
    page.barcode("CONTAINER", form.container)
    page.barcode("TARA", form.tara)
    page.barcode("LACRE", form.seal)
    _place_rows(page, "REMETENTE", parties.sender)
    _place_rows(page, "PRE-STACKING", parties.destination)
    _driver_rows(page, parties.driver)
    page.signature("CARIMBO / ASSINATURA DO TERMINAL")
    return RenderedDocument(pre_stacking_filename(form, parties), page.to_pdf())


def render_empty_release(form: EmptyReleaseForm, parties: DocumentParties) -> RenderedDocument:
    page = _Page("MINUTA DE LIBERAÇÃO DE CNTR VAZIO")
    page.row("DATA", format_br_date(form.date))
    page.row("BOOKING", form.booking)
    page.row("NAVIO", form.ship)
    page.row("ARMADOR", form.agencia)
    page.row("POD", form.pod)
    page.row("QTD", form.qtd_container)
    page.row("TIPO", f"{form.tipo} {form.padrao}")
    page.row("LOCAL", form.manual_local or (parties.destination.name if parties.destination else ""))
    page.row("OBS", form.obs or "VISTORIA SERÁ FEITO PELO MOTORISTA")
    _place_rows(page, "CLIENTE", parties.sender)
    _driver_rows(page, parties.driver)
    page.signature("ASSINATURA DO MOTORISTA")
    return RenderedDocument(empty_release_filename(form, parties), page.to_pdf())


def render_empty_return(form: EmptyReturnForm, parties: DocumentParties) -> RenderedDocument:
    page = _Page("MINUTA DE DEVOLUÇÃO DE CONTAINER VAZIO")
    page.row("DATA", format_br_date(form.date))
    page.barcode("CONTAINER", form.container)
    page.row("TIPO", form.tipo)
    page.row("NAVIO", form.ship)
    page.row("ARMADOR", form.agencia)
    page.row("POD", form.pod)
    page.row("BOOKING", form.booking)
    page.row("LOCAL", form.manual_local or (parties.destination.name if parties.destination else ""))
    _place_rows(page, "REMETENTE", parties.sender)
    _driver_rows(page, parties.driver)
    page.signature("ASSINATURA DO DEPOT")
    return RenderedDocument(empty_return_filename(form, parties), page.to_pdf())
