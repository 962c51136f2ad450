"""Printing module for miniprinter - receipt layout and composition."""

from miniprinter.printing.layout import join_names, label_indents, text_width, wrap
from miniprinter.printing.receipt import (
    Cut,
    Directive,
    Feed,
    ImageBlock,
    ReceiptComposer,
    TextLine,
    format_publication_date,
    print_receipt,
)

__all__ = [
    # Layout
    "join_names",
    "label_indents",
    "text_width",
    "wrap",
    # Receipt
    "Cut",
    "Directive",
    "Feed",
    "ImageBlock",
    "ReceiptComposer",
    "TextLine",
    "format_publication_date",
    "print_receipt",
]
