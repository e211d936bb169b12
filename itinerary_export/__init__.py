"""Itinerary planning and export package."""

from .ai import chat_reply, generate_ai_itinerary
from .export import ExportFormat, NamedPayload, build_filename, export_itinerary, save_to_directory
from .flow import render_flow
from .models import Activity, Day, Itinerary, Recommendation
from .pages import layout_pages, render_pages, stamp_footers
from .text import render_text

__all__ = [
	"Activity",
	"Day",
	"ExportFormat",
	"Itinerary",
	"NamedPayload",
	"Recommendation",
	"build_filename",
	"chat_reply",
	"export_itinerary",
	"generate_ai_itinerary",
	"layout_pages",
	"render_flow",
	"render_pages",
	"render_text",
	"save_to_directory",
	"stamp_footers",
]
