"""Estrategia legacy (SOAP 1.1 sobre xmltodict): builders y processors por área."""
