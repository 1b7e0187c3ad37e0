"""Bundled JSON Schema documents.

``crd_document.json`` describes the minimal shape a CustomResourceDefinition
must have for its structural schema to be extracted.
"""
