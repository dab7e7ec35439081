"""
Core Geometry, Compositing and Registry Logic
=============================================

This package contains the foundational logic of rectimage: flag-encoded
comparison predicates, rectangles and the containment fit, the Image
compositing pipeline and the near-duplicate signature registry. Codec and
hashing work is delegated to engines implementing ``rectimage.core.ports``.
"""
