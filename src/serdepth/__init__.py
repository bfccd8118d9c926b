"""
Serialization Depth Check (serdepth)

Static analysis of a closed universe of type definitions that finds the
member chains a fixed-depth object-graph serializer (Unity's) cannot store.

ARCHITECTURAL GUARANTEE:
------------------------
The core (model, classifier, graph, walker) contains ZERO knowledge of:
    - How type descriptions are loaded
    - Command line handling
    - Output formatting

Data flows one way:
    TypeUniverse -> SerializabilityClassifier -> DependencyGraph
    -> walker -> ViolationReport -> backends
"""

__version__ = "0.1.0"
