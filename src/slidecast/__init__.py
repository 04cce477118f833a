"""slidecast: picture-in-picture presentation videos.

Combine a slide deck (rendered to images) and a screen/webcam recording
into a single video with one stream inset over the other. All encoding is
done by ffmpeg; this package validates requests and builds the exact
argument lists ffmpeg is invoked with.
"""
