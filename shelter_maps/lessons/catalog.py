# shelter_maps/lessons/catalog.py

COMMUNITY_HUB = {
    "name": "Shelter Community Hub",
    "address": "Swan Buildings, 20 Swan Street, Manchester M4 5JW",
    "mapsLink": "https://maps.google.com/maps?q=Swan+Buildings,+20+Swan+Street,+Manchester+M4+5JW",
}

HUB_ADDRESS = COMMUNITY_HUB["address"]

QUICK_TIPS = [
    "Always check opening hours before directing clients",
    "Use Street View to help identify building entrances",
    "Consider accessibility needs when giving directions",
    "Save offline maps for areas with poor signal",
]

LESSONS = [
    {
        "id": "basics-1",
        "title": "Getting Started with Google Maps",
        "description": "Learn the basics of navigating Google Maps and finding locations in Manchester",
        "difficulty": "beginner",
        "category": "basics",
        "points": 100,
        "order": 1,
        "content": {
            "type": "interactive",
            "steps": [
                {
                    "title": "Welcome to Google Maps Training",
                    "content": "As a Shelter volunteer, you'll use Google Maps to help people find essential "
                               "services, navigate to appointments, and locate our community hubs. "
                               "Let's start with the basics!",
                    "action": "introduction",
                },
                {
                    "title": "Finding Our Community Hub",
                    "content": f"Let's start by finding our main hub: Shelter Community Hub, {HUB_ADDRESS}",
                    "action": "search",
                    "target": "Shelter Community Hub Manchester",
                },
                {
                    "title": "Understanding the Interface",
                    "content": "Notice the search bar, map controls, and different view options. "
                               "The satellite view can be helpful for identifying buildings.",
                    "action": "explore_interface",
                },
            ],
        },
    },
    {
        "id": "navigation-1",
        "title": "Getting Directions in Manchester",
        "description": "Learn how to get walking, driving, and public transport directions around Manchester",
        "difficulty": "beginner",
        "category": "navigation",
        "points": 150,
        "order": 2,
        "content": {
            "type": "interactive",
            "steps": [
                {
                    "title": "Getting Directions",
                    "content": "Help someone get from Manchester Piccadilly Station to our Community Hub "
                               "using public transport.",
                    "action": "directions",
                    "from": "Manchester Piccadilly Station",
                    "to": HUB_ADDRESS,
                },
                {
                    "title": "Alternative Routes",
                    "content": "Always check alternative routes - sometimes walking might be faster "
                               "than waiting for a bus!",
                    "action": "compare_routes",
                },
            ],
        },
    },
    {
        "id": "services-1",
        "title": "Finding Essential Services",
        "description": "Locate food banks, medical centers, and other essential services around Manchester",
        "difficulty": "intermediate",
        "category": "services",
        "points": 200,
        "order": 3,
        "content": {
            "type": "interactive",
            "steps": [
                {
                    "title": "Finding Food Banks",
                    "content": "A client needs to find the nearest food bank to Manchester City Centre. "
                               "Let's help them locate one.",
                    "action": "search_nearby",
                    "query": "food bank Manchester city centre",
                },
                {
                    "title": "Medical Services",
                    "content": "Now find the nearest NHS walk-in centre to our Community Hub.",
                    "action": "search_nearby",
                    "query": "NHS walk in centre Manchester M4",
                },
                {
                    "title": "Checking Opening Hours",
                    "content": "Always check opening hours and contact details before directing "
                               "someone to a service.",
                    "action": "check_details",
                },
            ],
        },
    },
    {
        "id": "accessibility-1",
        "title": "Accessibility Features",
        "description": "Learn how to find wheelchair accessible routes and locations",
        "difficulty": "intermediate",
        "category": "accessibility",
        "points": 200,
        "order": 4,
        "content": {
            "type": "interactive",
            "steps": [
                {
                    "title": "Wheelchair Accessible Routes",
                    "content": "Help someone in a wheelchair get from our Community Hub to "
                               "Manchester Central Library.",
                    "action": "accessible_directions",
                    "from": HUB_ADDRESS,
                    "to": "Manchester Central Library",
                },
                {
                    "title": "Checking Accessibility",
                    "content": "Look for accessibility information in location details - ramps, lifts, "
                               "accessible toilets.",
                    "action": "check_accessibility",
                },
            ],
        },
    },
    {
        "id": "emergency-1",
        "title": "Emergency Situations",
        "description": "Quick location finding for urgent situations",
        "difficulty": "advanced",
        "category": "emergency",
        "points": 250,
        "order": 5,
        "content": {
            "type": "interactive",
            "steps": [
                {
                    "title": "Nearest Hospital",
                    "content": "Someone needs urgent medical attention near Piccadilly Gardens. "
                               "Find the nearest A&E department.",
                    "action": "emergency_search",
                    "query": "A&E hospital Piccadilly Gardens Manchester",
                },
                {
                    "title": "Police Station",
                    "content": "Find the nearest police station to report an incident near the "
                               "Northern Quarter.",
                    "action": "emergency_search",
                    "query": "police station Northern Quarter Manchester",
                },
            ],
        },
    },
    {
        "id": "advanced-1",
        "title": "Advanced Features",
        "description": "Street View, offline maps, and sharing locations",
        "difficulty": "advanced",
        "category": "advanced",
        "points": 300,
        "order": 6,
        "content": {
            "type": "interactive",
            "steps": [
                {
                    "title": "Using Street View",
                    "content": "Use Street View to help someone identify the entrance to our "
                               "Community Hub on Cable Street.",
                    "action": "street_view",
                    "location": HUB_ADDRESS,
                },
                {
                    "title": "Sharing Locations",
                    "content": "Learn how to share location links via text or WhatsApp for clients "
                               "without smartphones.",
                    "action": "share_location",
                },
                {
                    "title": "Offline Maps",
                    "content": "Download offline maps of Manchester for areas with poor signal.",
                    "action": "offline_maps",
                },
            ],
        },
    },
]

LESSON_TIPS = {
    "basics-1": "Manchester's city center can be confusing with its mix of old and new streets. "
                "Always double-check the postcode!",
    "navigation-1": "Manchester's tram system (Metrolink) is often faster than buses for longer "
                    "distances across the city.",
    "services-1": "Many services in Manchester city center are within walking distance of each other - "
                  "sometimes walking is quicker than transport.",
    "accessibility-1": "Manchester city center has many pedestrianized areas and most modern buildings "
                       "have good accessibility features.",
    "emergency-1": "Manchester Royal Infirmary is the main A&E for the city center, but there are several "
                   "urgent care centers for non-emergency situations.",
    "advanced-1": "Download offline maps of Manchester city center and surrounding areas - mobile signal "
                  "can be patchy in some buildings.",
}


def get_tip(lesson_id: str):
    return LESSON_TIPS.get(lesson_id)
