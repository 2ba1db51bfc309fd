# Sample catalog in the backend ``GET /services`` shape, used when no backend is configured.

_GEOTECHNICS = {"id": 1, "code": "GEO", "name": "Geotechnics"}
_LABORATORY = {"id": 2, "code": "LAB", "name": "Laboratory"}
_CONCRETE = {"id": 3, "code": "CON", "name": "Concrete"}

SERVICE_RECORDS = [
    {
        "id": 101,
        "categoryId": 1,
        "code": "EDS-1",
        "name": "Soil study for buildings",
        "category": _GEOTECHNICS,
        "additionalFields": [
            {"id": 1001, "fieldName": "ubicacion", "label": "Site location", "type": "text", "required": True, "displayOrder": 3},
            {"id": 1002, "fieldName": "areaPredio", "label": "Lot area (m²)", "type": "number", "required": True, "displayOrder": 1, "min": 1},
            {"id": 1003, "fieldName": "cantidadPisos", "label": "Number of floors", "type": "number", "required": True, "displayOrder": 2, "min": 1, "max": 60},
        ],
    },
    {
        "id": 102,
        "categoryId": 1,
        "code": "EDS-2",
        "name": "Soil study for roads",
        "category": _GEOTECHNICS,
        "additionalFields": [
            {"id": 1011, "fieldName": "cantidadTramos", "label": "Number of sections", "type": "number", "required": True, "displayOrder": 1},
            {"id": 1012, "fieldName": "longitudTramos", "label": "Section length (m)", "type": "number", "required": True, "displayOrder": 2},
            {"id": 1013, "fieldName": "ubicacion", "label": "Site location", "type": "text", "required": True, "displayOrder": 3},
        ],
    },
    {
        "id": 103,
        "categoryId": 1,
        "code": "APQ-1",
        "name": "Manual test pit",
        "category": _GEOTECHNICS,
        "additionalFields": [],
    },
    {
        "id": 201,
        "categoryId": 2,
        "code": "PER-1",
        "name": "Soil profile sample",
        "category": _LABORATORY,
        "additionalFields": [
            {
                "id": 2001,
                "fieldName": "depth",
                "label": "Sampling depth",
                "type": "select",
                "required": True,
                "options": ["surface", "intermediate", "deep"],
                "displayOrder": 1,
            },
            {
                "id": 2002,
                "fieldName": "surfaceNotes",
                "label": "Surface conditions",
                "type": "textarea",
                "required": False,
                "dependsOnField": "depth",
                "dependsOnValue": "surface",
                "displayOrder": 2,
            },
            {"id": 2003, "fieldName": "fechaMuestreo", "label": "Sampling date", "type": "date", "required": False, "displayOrder": 3},
        ],
    },
    {
        "id": 202,
        "categoryId": 2,
        "code": "GRA-1",
        "name": "Grain size analysis",
        "category": _LABORATORY,
        "additionalFields": [],
    },
    {
        "id": 203,
        "categoryId": 2,
        "code": "HUM-1",
        "name": "Natural moisture content",
        "category": _LABORATORY,
        "additionalFields": [],
    },
    {
        "id": 301,
        "categoryId": 3,
        "code": "EMC-1",
        "name": "Concrete cylinder compression test",
        "category": _CONCRETE,
        "additionalFields": [
            {
                "id": 3001,
                "fieldName": "tipoMuestra",
                "label": "Sample type",
                "type": "select",
                "required": True,
                "options": ["Cylinder", "Beam", "Core"],
                "displayOrder": 1,
            },
            {
                "id": 3002,
                "fieldName": "diametroNucleo",
                "label": "Core diameter (mm)",
                "type": "number",
                "required": True,
                "dependsOnField": "tipoMuestra",
                "dependsOnValue": "Core",
                "displayOrder": 2,
            },
            {"id": 3003, "fieldName": "elementoFundido", "label": "Cast element", "type": "text", "required": True, "displayOrder": 3},
            {"id": 3004, "fieldName": "resistenciaDiseno", "label": "Design strength (psi)", "type": "number", "required": True, "displayOrder": 4},
            {"id": 3005, "fieldName": "identificacionMuestra", "label": "Sample identification", "type": "text", "required": True, "displayOrder": 5},
            {"id": 3006, "fieldName": "fechaFundida", "label": "Casting date", "type": "date", "required": True, "displayOrder": 6},
            {
                "id": 3007,
                "fieldName": "edadEnsayo",
                "label": "Test age (days)",
                "type": "select",
                "required": True,
                "options": ["7", "14", "28"],
                "displayOrder": 7,
            },
            {"id": 3008, "fieldName": "curadoEnObra", "label": "Cured on site", "type": "checkbox", "required": False, "displayOrder": 8},
        ],
    },
    {
        "id": 302,
        "categoryId": 3,
        "code": "DMC-1",
        "name": "Concrete mix design",
        "category": _CONCRETE,
        "additionalFields": [
            {"id": 3011, "fieldName": "planta", "label": "Plant", "type": "text", "required": True, "displayOrder": 1},
            {"id": 3012, "fieldName": "resistenciaRequerida", "label": "Required strength (psi)", "type": "number", "required": True, "displayOrder": 2},
            {"id": 3013, "fieldName": "tamanoTriturado", "label": "Aggregate size", "type": "select", "required": True, "options": ["1/2\"", "3/4\"", "1\""], "displayOrder": 3},
            {"id": 3014, "fieldName": "tipoCemento", "label": "Cement type", "type": "text", "required": True, "displayOrder": 4},
        ],
    },
]
