import re
import logging
from io import BytesIO
from typing import Optional

import requests
from bs4 import BeautifulSoup
from pptx import Presentation

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0 Safari/537.36"
    )
}

def clean_text(text: Optional[str]) -> str:
    if not text:
        return ""
    text = re.sub(r"\n\s*\n+", "\n\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    return text.strip()

def extract_deck_text(file_content: bytes) -> str:
    """Slide titles, body text and speaker notes from a PPTX brief deck"""
    try:
        prs = Presentation(BytesIO(file_content))
    except Exception as e:
        logger.error(f"Error reading PPTX brief: {e}")
        return ""

    slides = []
    for number, slide in enumerate(prs.slides, start=1):
        lines = [f"--- SLIDE {number} ---"]
        title = slide.shapes.title

        if title is not None and title.text.strip():
            lines.append(f"[Title]: {title.text.strip()}")

        shapes = [s for s in slide.shapes if s.has_text_frame and s != title]
        shapes.sort(key=lambda s: (s.top or 0, s.left or 0))
        for shape in shapes:
            lines.extend(p.text.strip() for p in shape.text_frame.paragraphs if p.text.strip())

        if slide.has_notes_slide and slide.notes_slide.notes_text_frame:
            notes = slide.notes_slide.notes_text_frame.text.strip()
            if notes:
                lines.append(f"[Speaker Notes]: {notes}")

        slides.append("\n".join(lines))

    text = "\n\n".join(slides)
    logger.info(f"Extracted {len(text)} chars from PPTX brief")
    return text

def fetch_page_text(url: str, timeout: int = 30) -> str:
    """Visible text of a client web page; empty string when unreachable"""
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error scraping URL {url}: {e}")
        return ""

    soup = BeautifulSoup(response.text, "html.parser")
    for tag in soup(["script", "style", "noscript", "header", "footer", "nav", "aside"]):
        tag.decompose()

    text = clean_text(soup.get_text(separator="\n"))
    logger.info(f"Extracted {len(text)} chars from URL: {url}")
    return text

def build_brief_context(brief: str, deck_text: str = "", page_text: str = "") -> str:
    """Label each available source so the model can tell them apart"""
    sections = [f"SOURCE: CLIENT BRIEF\n{clean_text(brief)}"]
    if deck_text:
        sections.append(f"SOURCE: PRESENTATION\n{clean_text(deck_text)[:5000]}")
    if page_text:
        sections.append(f"SOURCE: WEBSITE\n{clean_text(page_text)[:5000]}")
    return "\n\n".join(sections)
