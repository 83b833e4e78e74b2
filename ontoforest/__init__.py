"""
OntoForest
==========
Ontology entity hierarchy extraction: flat entities with parent references
in, an acyclic forest of roots and children out.

版本: 1.0.0
"""

__version__ = "1.0.0"
