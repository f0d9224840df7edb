"""Styled Excel workbooks for ledger exports."""
from .writer import Column, ExcelWriter
