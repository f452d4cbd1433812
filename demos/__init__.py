"""Demos module - Visual pygame demos"""
