"""
Sincronizacion del catalogo de productos Google Sheets -> base de datos.
"""
