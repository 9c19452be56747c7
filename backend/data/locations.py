# backend/data/locations.py

# Bucharest city centre; used when the user has not set a location
DEFAULT_LOCATION = {
    "lat": 44.4268,
    "lng": 26.1025,
    "address": "Bucharest, Romania",
}

# Events with a missing or broken position are pinned here
FALLBACK_POSITION = (44.4268, 26.1025)

AVAILABLE_GENRES = ["Music", "Art", "Sports", "Fair", "Theater", "Education"]

# Quick picks offered by the location setup screen
LOCATION_ADDRESSES = {
    "Old Town": "Strada Lipscani, Bucharest, Romania",
    "Herastrau Park": "Parcul Regele Mihai I, Bucharest, Romania",
    "University Square": "Piata Universitatii, Bucharest, Romania",
    "Floreasca": "Calea Floreasca, Bucharest, Romania",
    "Cotroceni": "Bulevardul Geniului, Bucharest, Romania",
    "Cluj-Napoca": "Piata Unirii, Cluj-Napoca, Romania",
    "Brasov": "Piata Sfatului, Brasov, Romania",
}
