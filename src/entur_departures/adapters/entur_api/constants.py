"""Constants for the Entur APIs."""

ENTUR_GRAPHQL_URL = "https://api.entur.io/journey-planner/v3/graphql"
ENTUR_GEOCODER_URL = "https://api.entur.io/geocoder/v1/autocomplete"

STOP_PLACE_ID_PREFIX = "NSR:StopPlace:"

# Editor lookups look further ahead than the countdown to catch infrequent lines
LOOKUP_NUMBER_OF_DEPARTURES = 20
LOOKUP_TIME_RANGE_SECONDS = 7200
SEARCH_RESULT_SIZE = 10

STOP_SNAPSHOT_QUERY = """
query StopSnapshot($id: String!, $numberOfDepartures: Int!, $timeRange: Int!) {
  stopPlace(id: $id) {
    id
    name
    quays {
      id
      name
      estimatedCalls(numberOfDepartures: $numberOfDepartures, timeRange: $timeRange) {
        expectedDepartureTime
        aimedDepartureTime
        realtime
        destinationDisplay {
          frontText
        }
        serviceJourney {
          line {
            publicCode
            name
          }
        }
      }
    }
  }
}
"""
