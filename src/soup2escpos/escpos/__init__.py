"""ESC/POS protocol layer: command constants and builders for thermal receipt printers."""
