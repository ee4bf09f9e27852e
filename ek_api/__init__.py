"""Weclapp-Artikelexport mit letztem Einkaufspreis für den Tabellenimport."""
