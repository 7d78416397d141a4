"""Deterministic generation and breeding engine.

Leaf modules (:mod:`.errors`, :mod:`.hash_stream`, :mod:`.weighted`) have no
dependencies on the record models; :mod:`.rarity`, :mod:`.generators` and
:mod:`.breeding` build on them.
"""
