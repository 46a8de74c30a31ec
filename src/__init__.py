"""Application Layer.

Infrastructure adapters that present domain state to external collaborators.
No placement logic lives here.
"""
