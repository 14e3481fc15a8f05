"""Infrastructure layer: persistence and quote providers"""
