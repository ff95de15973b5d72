"""Sample unit plan in millimetres."""

# Three bedrooms, living/kitchen, two bathrooms and two
# balconies. Coordinates are plan millimetres with y growing downward.
SAMPLE_FLOOR_PLAN = {
    "overallDimensions": {"width": 13725, "height": 11660},
    "spaces": [
        {
            "type": "bedroom (with dressing room)",
            "comment": "left bedroom",
            "startCoordinate": [0, 3185],
            "endCoordinate": [3210, 11660],
        },
        {
            "type": "bedroom (with dressing room)",
            "comment": "upper right bedroom, dressing area included",
            "startCoordinate": [6115, 3395],
            "endCoordinate": [10525, 6950],
        },
        {
            "type": "bedroom (with dressing room)",
            "comment": "lower right bedroom",
            "startCoordinate": [7920, 6950],
            "endCoordinate": [11130, 11660],
        },
        {
            "type": "living (with kitchen/dining)",
            "comment": "living room",
            "startCoordinate": [3210, 3185],
            "endCoordinate": [7920, 11660],
        },
        {
            "type": "living (with kitchen/dining)",
            "comment": "kitchen and dining",
            "startCoordinate": [2015, 1410],
            "endCoordinate": [6115, 3395],
        },
        {
            "type": "bathroom",
            "comment": "upper left bathroom",
            "startCoordinate": [0, 465],
            "endCoordinate": [2015, 2890],
        },
        {
            "type": "bathroom",
            "comment": "upper right bathroom",
            "startCoordinate": [8060, 0],
            "endCoordinate": [10525, 1410],
        },
        {
            "type": "balcony",
            "comment": "upper balcony",
            "startCoordinate": [2015, 0],
            "endCoordinate": [6115, 1410],
        },
        {
            "type": "balcony",
            "comment": "lower right balcony",
            "startCoordinate": [11130, 6950],
            "endCoordinate": [13725, 11660],
        },
    ],
}
