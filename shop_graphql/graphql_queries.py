"""
GraphQL Query Definitions — The read-only queries the exporter issues.

Both queries select "edges { cursor node }" and "pageInfo" so the client can
page through a connection with the "after" variable. Polymorphic selections
always include __typename; decoding falls back on the GID type fragment only
when __typename was not selected.

WEBHOOK_SUBSCRIPTIONS_QUERY
    All webhook subscriptions of the shop. The endpoint is a union of
    WebhookHttpEndpoint, WebhookEventBridgeEndpoint and WebhookPubSubEndpoint.

PRODUCT_MEDIA_QUERY
    The media of one product. Each node is a MediaImage, Video,
    ExternalVideo or Model3d.
"""

WEBHOOK_SUBSCRIPTIONS_QUERY = """
query WebhookSubscriptions($first: Int!, $after: String) {
  webhookSubscriptions(first: $first, after: $after) {
    edges {
      cursor
      node {
        id
        topic
        format
        includeFields
        metafieldNamespaces
        createdAt
        updatedAt
        endpoint {
          __typename
          ... on WebhookHttpEndpoint {
            callbackUrl
          }
          ... on WebhookEventBridgeEndpoint {
            arn
          }
          ... on WebhookPubSubEndpoint {
            pubSubProject
            pubSubTopic
          }
        }
      }
    }
    pageInfo {
      hasNextPage
      hasPreviousPage
      startCursor
      endCursor
    }
  }
}
"""

PRODUCT_MEDIA_QUERY = """
query ProductMedia($id: ID!, $first: Int!, $after: String) {
  product(id: $id) {
    id
    media(first: $first, after: $after) {
      edges {
        cursor
        node {
          __typename
          id
          alt
          mediaContentType
          status
          preview {
            status
            image {
              url
              altText
              width
              height
            }
          }
          ... on MediaImage {
            mimeType
            image {
              id
              url
              altText
              width
              height
            }
          }
          ... on Video {
            duration
            filename
            originalSource {
              url
              mimeType
              format
              width
              height
            }
            sources {
              url
              mimeType
              format
              width
              height
            }
          }
          ... on ExternalVideo {
            embedUrl
            host
            originUrl
          }
          ... on Model3d {
            filename
            originalSource {
              url
              mimeType
              format
              filesize
            }
            sources {
              url
              mimeType
              format
              filesize
            }
          }
        }
      }
      pageInfo {
        hasNextPage
        hasPreviousPage
        startCursor
        endCursor
      }
    }
  }
}
"""
