"""
BioProcessing — Production Report
Writes a formatted Word document summarising a simulation run.
"""

from typing import List, Sequence
import logging

from docx import Document
from docx.shared import Pt, RGBColor
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.oxml import OxmlElement

from .core.facility import FacilityKind

logger = logging.getLogger(__name__)


def set_cell_shading(cell, color):
    """Set cell background color."""
    shading = OxmlElement('w:shd')
    shading.set(qn('w:fill'), color)
    cell._tc.get_or_add_tcPr().append(shading)


def add_formatted_table(doc, headers: Sequence[str], rows: List[Sequence], header_color="1F4E79"):
    """Add a formatted table with header styling."""
    table = doc.add_table(rows=1, cols=len(headers))
    table.style = 'Table Grid'

    header_cells = table.rows[0].cells
    for i, header in enumerate(headers):
        header_cells[i].text = header
        header_cells[i].paragraphs[0].runs[0].bold = True
        header_cells[i].paragraphs[0].runs[0].font.color.rgb = RGBColor(255, 255, 255)
        set_cell_shading(header_cells[i], header_color)

    for row_data in rows:
        row = table.add_row()
        for i, cell_data in enumerate(row_data):
            row.cells[i].text = str(cell_data)

    return table


def _stock_cell(stock) -> str:
    return f"{stock.current_level:.1f} / {stock.capacity:.1f}"


def _facility_rows(kind: FacilityKind, facilities) -> List[List[str]]:
    rows = []
    for facility in facilities:
        row = [facility.name, facility.state.name]
        if kind == FacilityKind.ALGAE_VAT:
            row.append(_stock_cell(facility.algae))
        elif kind == FacilityKind.MUSHROOM_FARM:
            row.extend([
                f"{facility.mushrooms_ready} / {facility.max_mushrooms}",
                _stock_cell(facility.fertilizer),
            ])
        elif kind == FacilityKind.BIO_REACTOR:
            row.extend([
                _stock_cell(facility.organic_matter),
                _stock_cell(facility.biofuel),
                _stock_cell(facility.biogas),
            ])
        elif kind == FacilityKind.COMPOSTER:
            row.extend([
                _stock_cell(facility.waste),
                _stock_cell(facility.fertilizer),
            ])
        rows.append(row)
    return rows


FACILITY_TABLE_HEADERS = {
    FacilityKind.ALGAE_VAT: ['Facility', 'State', 'Algae'],
    FacilityKind.MUSHROOM_FARM: ['Facility', 'State', 'Mushrooms', 'Fertilizer'],
    FacilityKind.BIO_REACTOR: ['Facility', 'State', 'Organic Matter', 'Biofuel', 'Biogas'],
    FacilityKind.COMPOSTER: ['Facility', 'State', 'Waste', 'Fertilizer'],
}


def create_production_report(simulation, filepath: str) -> str:
    """
    Write a production report for a simulation.

    Includes rate multipliers, aggregate statistics, and one table per
    facility kind that has live facilities.

    Returns:
        The path written.
    """
    doc = Document()

    # Set default font
    style = doc.styles['Normal']
    style.font.name = 'Calibri'
    style.font.size = Pt(11)

    title = doc.add_heading('BIOPROCESSING PRODUCTION REPORT', 0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    info = doc.add_paragraph()
    info.alignment = WD_ALIGN_PARAGRAPH.CENTER
    info.add_run('Ticks: ').bold = True
    info.add_run(f'{simulation.current_tick}\n')
    info.add_run('Simulated time: ').bold = True
    info.add_run(f'{simulation.state.elapsed_time:.1f} s')

    # ========== RATES ==========
    doc.add_heading('Rate Multipliers', level=1)
    add_formatted_table(doc,
        ['Setting', 'Value'],
        [[name, value] for name, value in simulation.rates.get_status().items()],
    )

    # ========== STATISTICS ==========
    doc.add_heading('Production Totals', level=1)
    stats = simulation.statistics.get_status()
    add_formatted_table(doc,
        ['Metric', 'Total'],
        [
            ['Biofuel produced', f"{stats['total_biofuel_produced']:.2f}"],
            ['Compost produced', f"{stats['total_compost_produced']:.2f}"],
            ['Plants harvested', stats['total_plants_harvested']],
        ],
    )

    # ========== FACILITIES ==========
    doc.add_heading('Facilities', level=1)
    for kind in FacilityKind:
        facilities = simulation.facilities(kind)
        if not facilities:
            continue
        doc.add_heading(kind.label, level=2)
        add_formatted_table(doc, FACILITY_TABLE_HEADERS[kind], _facility_rows(kind, facilities))

    doc.save(filepath)
    logger.info(f"Production report written to {filepath}")
    return filepath
