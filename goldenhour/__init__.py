"""
Golden Hour Service Package.

Solar timing for photographers:
- Sunrise, solar noon and sunset from the sun's elevation curve
- Golden hour and blue hour windows from configurable elevation angles
- Real-time sun position and light quality
- Offline timezone resolution from coordinates
"""

__version__ = "1.0.0"
