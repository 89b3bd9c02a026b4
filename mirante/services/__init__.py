"""Serviços HTTP e jobs do Mirante."""
