"""
cep_weather.domain

Pure domain rules: postal-code validation and temperature conversion.
"""

# Package marker.
