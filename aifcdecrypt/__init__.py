"""
# AIFC decryption

An AIFF/AIFC file is a FORM chunk containing a form type and a list of
sub-chunks, each one made of a 4-byte identifier, a big-endian 32-bit size
and that many bytes of data (plus a pad byte when the size is odd).

The format is described as a set of classes: a Chunk is made of Fields
declared as class attributes, in the same order they appear in the file.

Two basic main operations are defined for a chunk and its fields:

 1. unpack(): read the binary data and build a high-level representation of that.
    A chunk found inside a container is read with read_data(stream, start, size)
    and can never consume anything outside [start, start + size).

 2. pack(): encode the high-level representation into binary data;
    write() adds the identifier, the size and the padding.

The container reading an AIFC file goes through the following states

 1. EXPECT_FORM_HEADER
 2. EXPECT_FORM_TYPE
 3. WALKING
 4. DECRYPTING
 5. DONE
 6. INVALID

and, when the sound data is encrypted, decrypts it with the key found in
the 'Able' chunk.
"""
