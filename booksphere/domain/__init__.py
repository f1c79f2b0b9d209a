"""
Domain layer.

Pure business objects and rules with no framework dependencies:
- common: entity/value-object bases, typed identifiers, domain errors
- identity: reader profile and preferences
- mood: moods, presets, trigger rules, mood map breakpoints and resolution
- sync: reconciliation events
"""
